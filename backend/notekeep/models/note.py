"""
NoteKeep Backend — Note Record and Seed Data
==============================================

What:  The Note record held by the NoteStore, plus the notes every fresh
       process starts with.
Why:   One typed record is shared by the store, the service and the API,
       so what the client POSTs is exactly what a later GET returns.
Who:   Used by NoteStore, NoteService, the notes routes and the Notes View.

Record Design:
    - id: Client supplied (the browser uses Date.now()). NOT unique and NOT
      tied to the owner. The list filter compares against this field, so
      several notes "belonging" to user 101 all carry id 101.
    - title / content: Free text, no length limits.
    - date: Calendar date string (YYYY-MM-DD) set by the client on save.
    - owner: Email of whoever last saved the note. Informational only; the
      server never checks it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Note(BaseModel):
    """
    A single note.

    Lifecycle:
        1. Created by POST /api/notes (inserted at the front of the store)
        2. Replaced wholesale by PUT /api/notes, matched on id
        3. Removed by DELETE /api/notes, every note with that id at once
    """

    id: int = Field(description="Client-generated identifier (not unique)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    date: str = Field(description="Calendar date of last save (YYYY-MM-DD)")
    owner: Optional[str] = Field(default=None, description="Email of the author")


def _seed(note_id: int, owner: str, entries: List[tuple]) -> List[Note]:
    return [
        Note(id=note_id, title=title, content=content, date=date, owner=owner)
        for title, content, date in entries
    ]


def default_seed() -> List[Note]:
    """
    Returns fresh copies of the demo notes: three for each of ids 101-104.

    A new list is built on every call so resetting a store never shares
    Note instances with another store.
    """
    return [
        *_seed(101, "vanshikarajput@gmail.com", [
            ("Meeting Notes", "Discussed project timeline and deliverables", "2024-10-20"),
            ("Ideas", "New feature concepts for the app", "2024-10-21"),
            ("Shopping List", "Milk, eggs, bread, coffee", "2024-10-22"),
        ]),
        *_seed(102, "john.doe@example.com", [
            ("Workout Plan", "Monday: Chest, Tuesday: Back, Wednesday: Legs", "2024-10-20"),
            ("Travel Checklist", "Passport, Tickets, Wallet, Sunglasses", "2024-10-21"),
            ("Books to Read", "Atomic Habits, Clean Code, Deep Work", "2024-10-22"),
        ]),
        *_seed(103, "alice@example.com", [
            ("Project Research", "Read papers on AI algorithms and summarize findings", "2024-10-20"),
            ("Grocery List", "Tomatoes, Onions, Chicken, Rice", "2024-10-21"),
            ("Birthday Plans", "Reserve restaurant, invite friends, buy cake", "2024-10-22"),
        ]),
        *_seed(104, "bob@example.com", [
            ("Work Tasks", "Finish report, attend client call, update spreadsheet", "2024-10-20"),
            ("Ideas for Blog", "React tips, TypeScript tricks, Next.js tutorials", "2024-10-21"),
            ("Movies to Watch", "Inception, Interstellar, The Matrix", "2024-10-22"),
        ]),
    ]
