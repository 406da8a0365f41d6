"""
Deterministic sample data for local development.

The in-memory store is seeded from here on startup (SEED_SAMPLE_DATA=true)
so the dashboard has something to show: the constituency's constituents,
the minister's staff, requests spread over the 30 days before `now`, and
appointments for the open appointment requests. The same seed always yields
the same data.
"""

import random
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

from backend.models.enums import RequestCategory, RequestPriority, RequestStatus
from backend.models.schemas import Appointment, Constituent, RequestRecord, TeamMember
from backend.services.request_store import assignee_for_category


SAMPLE_WINDOW_DAYS: int = 30

# (name, email, phone, address, district)
SAMPLE_CONSTITUENTS: List[Tuple[str, str, str, str, str]] = [
    ("Venkateshwarlu Reddy", "venkateshwarlu.r@example.com", "+91 98765 43210",
     "24 Main Road, Mangalagiri, Guntur, Andhra Pradesh 522503", "Mangalagiri"),
    ("Narasimha Raju", "narasimha.r@example.com", "+91 87654 32109",
     "8B Brodipet, Guntur, Andhra Pradesh 522002", "Guntur West"),
    ("Ramachandra Prasad", "ramachandra.p@example.com", "+91 76543 21098",
     "45 Main Street, Tadikonda, Guntur, Andhra Pradesh 522236", "Tadikonda"),
    ("Lakshmamma Chowdary", "lakshmamma.c@example.com", "+91 65432 10987",
     "78 Market Street, Prathipadu, Guntur, Andhra Pradesh 522019", "Prathipadu"),
    ("Srinivasulu Konda", "srinivasulu.k@example.com", "+91 54321 09876",
     "112 Main Street, Guntur East, Guntur, Andhra Pradesh 522006", "Guntur East"),
    ("Venkateswara Gundabathula", "venkateswara.g@example.com", "+91 98765 12345",
     "35 Station Road, Tenali, Guntur, Andhra Pradesh 522201", "Tenali"),
    ("Suryakantamma Narne", "suryakantamma.n@example.com", "+91 87654 56789",
     "22 Gandhi Road, Guntur West, Guntur, Andhra Pradesh 522004", "Guntur West"),
    ("Ravi Yellamanchili", "ravi.y@example.com", "+91 76543 67890",
     "50 Canal Road, Ponnur, Guntur, Andhra Pradesh 522124", "Ponnur"),
    ("Padmavathi Bapatla", "padmavathi.b@example.com", "+91 65432 78901",
     "85 Temple Street, Mangalagiri, Guntur, Andhra Pradesh 522503", "Mangalagiri"),
]

# (name, email, role, phone); ids line up with DEFAULT_ASSIGNEES
SAMPLE_TEAM: List[Tuple[str, str, str, str]] = [
    ("Annapurna Devi", "annapurna.devi@gov.in", "Administrative Officer", "+91 98765 10001"),
    ("Ravi Teja", "ravi.teja@gov.in", "Emergency Coordinator", "+91 87654 10002"),
    ("Venkata Subrahmanyam", "venkata.s@gov.in", "Infrastructure Specialist", "+91 76543 10003"),
    ("Padma Lakshmi", "padma.l@gov.in", "Public Relations Officer", "+91 65432 10004"),
]

# Appointment slots as (hour, minute)
APPOINTMENT_SLOTS: List[Tuple[int, int]] = [(10, 0), (10, 30), (11, 30), (14, 0), (15, 30)]


# (subject, description, location) templates per category
SAMPLE_TEMPLATES: Dict[RequestCategory, List[Tuple[str, str, str]]] = {
    RequestCategory.APPOINTMENT: [
        ("Meeting about land records",
         "Requesting time with the minister to discuss a pending land mutation.",
         "Mangalagiri"),
        ("Farmers' association delegation",
         "Delegation of 12 farmers requests a meeting on irrigation water release.",
         "Tadikonda"),
    ],
    RequestCategory.STARTUP_SUPPORT: [
        ("Incubation space for agri-tech startup",
         "Early-stage startup seeking subsidised office space and mentoring.",
         "Guntur West"),
        ("Seed grant application follow-up",
         "Applied for the state seed grant three months ago, no response yet.",
         "Guntur East"),
    ],
    RequestCategory.INFRASTRUCTURE: [
        ("Broken street lights on Main Road",
         "Four street lights have been out near the bus stand for a week.",
         "Mangalagiri"),
        ("Pothole repair on Brodipet 4th line",
         "Deep potholes causing two-wheeler accidents after the rains.",
         "Guntur West"),
        ("Drinking water pipeline leakage",
         "Main pipeline leaking near the school, water supply reduced.",
         "Tadikonda"),
    ],
    RequestCategory.PUBLIC_ISSUE: [
        ("Garbage not collected",
         "Municipal garbage collection has skipped our colony for ten days.",
         "Guntur East"),
        ("Noise from late-night construction",
         "Construction work continues past midnight near residential houses.",
         "Guntur West"),
    ],
    RequestCategory.EMERGENCY: [
        ("Flooding in low-lying colony",
         "Heavy rain has flooded twenty houses; residents need relocation.",
         "Tadikonda"),
        ("Transformer fire",
         "Transformer caught fire, entire street without power.",
         "Mangalagiri"),
    ],
}


def _pick_priority(rng: random.Random, category: RequestCategory) -> RequestPriority:
    if category == RequestCategory.EMERGENCY:
        return rng.choice([RequestPriority.HIGH, RequestPriority.HIGH, RequestPriority.MEDIUM])
    return rng.choice(list(RequestPriority))


def build_sample_requests(count: int, now: datetime, seed: int = 7) -> List[RequestRecord]:
    """
    Build `count` sample records with ids 1..count.

    Args:
        count: Number of records.
        now: Upper bound for every timestamp.
        seed: Random seed.

    Returns:
        Records whose createdAt falls within SAMPLE_WINDOW_DAYS before now and
        whose updatedAt lies between createdAt and now.
    """
    rng = random.Random(seed)
    categories = list(SAMPLE_TEMPLATES)
    records: List[RequestRecord] = []

    for request_id in range(1, count + 1):
        category = rng.choice(categories)
        subject, description, location = rng.choice(SAMPLE_TEMPLATES[category])
        created_at = now - timedelta(
            days=rng.randrange(SAMPLE_WINDOW_DAYS),
            minutes=rng.randrange(24 * 60),
        )
        updated_at = min(created_at + timedelta(hours=rng.randrange(72)), now)

        records.append(
            RequestRecord(
                id=request_id,
                constituentId=rng.randint(1, len(SAMPLE_CONSTITUENTS)),
                category=category,
                subject=subject,
                description=description,
                status=rng.choice(list(RequestStatus)),
                priority=_pick_priority(rng, category),
                assignedToId=assignee_for_category(category),
                location=location,
                createdAt=created_at,
                updatedAt=updated_at,
            )
        )

    return records


def build_sample_constituents() -> List[Constituent]:
    """The constituents referenced by sample requests, ids 1..9."""
    return [
        Constituent(id=index, name=name, email=email, phone=phone, address=address, district=district)
        for index, (name, email, phone, address, district) in enumerate(SAMPLE_CONSTITUENTS, start=1)
    ]


def build_sample_team_members() -> List[TeamMember]:
    return [
        TeamMember(id=index, name=name, email=email, role=role, phone=phone)
        for index, (name, email, role, phone) in enumerate(SAMPLE_TEAM, start=1)
    ]


def build_sample_appointments(
    requests: List[RequestRecord],
    now: datetime,
    seed: int = 7,
) -> List[Appointment]:
    """
    One appointment per open appointment request, on one of the next seven
    days (today included) at a fixed office slot.
    """
    rng = random.Random(seed)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    appointments: List[Appointment] = []

    for request in requests:
        if request.category != RequestCategory.APPOINTMENT:
            continue
        if request.status == RequestStatus.RESOLVED:
            continue

        hour, minute = rng.choice(APPOINTMENT_SLOTS)
        scheduled = today + timedelta(days=rng.randrange(7), hours=hour, minutes=minute)
        appointments.append(
            Appointment(
                id=len(appointments) + 1,
                requestId=request.id,
                scheduledDate=scheduled,
                duration=rng.choice([30, 45, 60]),
                location="Constituency Office, Mangalagiri",
                isConfirmed=rng.random() < 0.7,
            )
        )

    return appointments
