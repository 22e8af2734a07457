from __future__ import annotations

import pytest

from cfrs.schemas import SCHEMA_URI


@pytest.fixture
def full_resume() -> dict:
    return {
        "$schema": SCHEMA_URI,
        "basics": {
            "name": "José Núñez",
            "label": "Platform Engineer",
            "email": "jose@example.com",
            "phone": "+34 600 000 000",
            "url": "https://jose.example.com",
            "summary": "Builds reliable delivery pipelines.",
            "x_cfrs_pronouns": "he/him",
        },
        "work": [
            {
                "name": "Acme Corp",
                "position": "Staff Engineer",
                "startDate": "2021-03",
                "summary": "Owns the build platform.",
                "highlights": ["Cut CI time in half", "Introduced canary deploys"],
                "x_cfrs_employment_type": "full-time",
            },
            {
                "name": "Initech",
                "position": "Engineer",
                "startDate": "2017-06-01",
                "endDate": "2021-02-28",
            },
        ],
        "education": [
            {
                "institution": "Universidad de Sevilla",
                "studyType": "BSc",
                "area": "Computer Science",
                "startDate": "2013",
                "endDate": "2017",
            }
        ],
        "skills": [{"name": "Kubernetes"}, {"name": "Python", "x_cfrs_skill_category": "language"}],
        "x_cfrs_custom_sections": [
            {
                "sectionTitle": "Talks",
                "sectionType": "talks",
                "items": [{"title": "Shipping on Fridays", "venue": "PyCon ES"}],
            }
        ],
    }


@pytest.fixture
def minimal_resume() -> dict:
    return {"$schema": SCHEMA_URI, "basics": {"name": "Ada Lovelace"}}
