"""
Sample meeting-record corpus.

A small set of council and committee minutes used to seed development
stores. In production the archive is loaded by a separate ingestion job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from meeting_search.retrieval.document import Document

if TYPE_CHECKING:
    from meeting_search.core import DocumentStore


def get_meeting_records() -> list[Document]:
    """Get the seed meeting records."""
    return [
        Document(
            id="rec_plenary_2023_301_1",
            content="""Speaker Kim opened the plenary session and moved to the budget agenda.
Member Lee: The proposed youth housing subsidy is underfunded by 12 percent compared
to last year's demand survey. I ask the executive to explain why the allocation shrank.
Deputy Mayor Park: The reduction reflects the transfer of the rental deposit programme
to the provincial government. The youth housing subsidy itself is unchanged per person.""",
            metadata={
                "meeting_type": "plenary",
                "date": "2023-03-14",
                "session_num": "301",
                "source": "Minutes of the 301st Plenary Session",
            },
        ),
        Document(
            id="rec_budget_2023_301_2",
            content="""Budget and Accounts Committee, second sitting.
Member Choi questioned the public transport deficit guarantee: the bus operators received
48 billion won in deficit guarantees while route reliability fell.
Transport Director Han: We will tie next year's guarantee to punctuality targets and publish
the route-level data quarterly.""",
            metadata={
                "meeting_type": "committee",
                "date": "2023-03-16",
                "session_num": "301",
                "source": "Budget and Accounts Committee Minutes",
            },
        ),
        Document(
            id="rec_admin_2023_305_1",
            content="""Administrative Affairs Committee.
Member Lee raised the delay in the city hall annex construction, now eight months behind.
Facilities Manager Yoon: Ground conditions required a redesign of the foundation. The revised
completion date is the end of next year, and no additional budget is requested at this time.""",
            metadata={
                "meeting_type": "committee",
                "date": "2023-07-05",
                "session_num": "305",
                "source": "Administrative Affairs Committee Minutes",
            },
        ),
        Document(
            id="rec_plenary_2023_305_2",
            content="""Plenary session, policy questions.
Member Jung: Elderly care centres in the northern district have waiting lists above 200 people.
Will the city open the two centres promised in the last election?
Mayor: Both centres are funded in the mid-term plan. Site selection for the first centre
concludes this autumn.""",
            metadata={
                "meeting_type": "plenary",
                "date": "2023-07-11",
                "session_num": "305",
                "source": "Minutes of the 305th Plenary Session",
            },
        ),
        Document(
            id="rec_env_2023_308_1",
            content="""Environment and Water Committee.
Member Seo asked about the fine dust reduction ordinance. Environment Director Oh reported
that diesel bus replacement reached 70 percent and that the remaining fleet will be converted
to electric buses by 2025, subject to national subsidy approval.""",
            metadata={
                "meeting_type": "committee",
                "date": "2023-09-20",
                "session_num": "308",
            },
        ),
        Document(
            id="rec_budget_2023_310_1",
            content="""Special Committee on Budget, final review.
The committee cut the festival promotion line by 30 percent and moved the savings to the
youth housing subsidy and to elderly care centre staffing. Member Choi dissented on the
festival cut, citing the impact on local merchants.""",
            metadata={
                "meeting_type": "special committee",
                "date": "2023-12-08",
                "session_num": "310",
                "source": "Special Committee on Budget Minutes",
            },
        ),
        Document(
            id="rec_plenary_2024_312_1",
            content="""Plenary session.
Speaker Kim announced the adoption of the public transport service evaluation ordinance.
Member Han thanked the transport department for publishing route-level punctuality data
as promised in the budget committee.""",
            metadata={
                "meeting_type": "plenary",
                "date": "2024-02-20",
                "session_num": "312",
                "source": "Minutes of the 312th Plenary Session",
            },
        ),
        Document(
            id="rec_hearing_2024_314_1",
            content="""Public hearing on the northern district redevelopment plan.
Residents raised concerns about school capacity and the loss of small parks.
The Urban Planning Director committed to a revised green-space ratio before the
plan returns to the committee.""",
            metadata={
                "meeting_type": "public hearing",
                "date": "2024-04-03",
            },
        ),
    ]


def seed_document_store(store: DocumentStore) -> None:
    """
    Seed a document store with the sample meeting records.

    Works with PgDocumentStore, InMemoryDocumentStore, or any other
    implementation exposing insert_documents_batch / insert_document.
    """
    docs = get_meeting_records()

    if hasattr(store, "insert_documents_batch"):
        store.insert_documents_batch(docs)
    elif hasattr(store, "insert_document"):
        for doc in docs:
            store.insert_document(doc)
    else:
        raise TypeError(
            f"Store {type(store).__name__} does not support document insertion"
        )
