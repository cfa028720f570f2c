import json
import logging
from datetime import datetime

import pytest

NOW = datetime(2021, 6, 1)


def sample_document() -> dict:
    return {
        "patient_id": "P-001",
        "encounters": [
            {
                "encounter_no": 2,
                "date": "2020-06-01",
                "type": "Follow-up",
                "provider": "Dr. Rivera",
                "differential_diagnosis": ["Rheumatoid arthritis", "Lupus"],
                "impression": "Improving on therapy",
            },
            {
                "encounter_no": 1,
                "date": "2020-01-01",
                "type": "Initial visit",
                "diagnosis": "Joint pain",
                "notes": "Morning stiffness",
                "chief_complaint": "Swollen hands",
            },
            {"encounter_no": 3, "date": "2021-01-01", "type": "Review"},
        ],
        "medications": [
            {
                "name": "Methotrexate",
                "startDate": "2020-01-15",
                "endDate": "2020-09-01",
                "dose": "15 mg weekly",
            },
            {"name": "Lisinopril", "startDate": "2019-06-01"},
            {"name": "Methotrexate", "startDate": "2020-11-01", "endDate": "2020-11-01"},
        ],
        "labs": [
            {
                "biomarker": "CRP",
                "unit": "mg/L",
                "referenceRange": {"min": 8, "max": 12},
                "values": [
                    {"t": "2020-06-01", "value": 15},
                    {"t": "2020-01-01", "value": 5},
                    {"t": "2021-01-01", "value": 10},
                ],
            },
            {"biomarker": "ESR", "unit": "mm/h", "values": []},
        ],
        "keyEvents": [
            {"t": "2020-03-05T15:00:00Z", "event": "Biopsy", "note": "Synovial"},
            {"t": "2020-03-05T09:00:00Z", "event": "Admission"},
            {"t": "2020-04-01T09:00:00Z", "event": "Discharge"},
        ],
        "risks": [
            {"t": "2020-01-01", "riskScore": 8.0, "factors": ["smoking"]},
            {"t": "2020-06-01", "riskScore": 5.0},
            {"t": "2021-01-01", "riskScore": 2.0},
        ],
        "causalNodes": [
            {"title": "Methotrexate started", "description": "Weekly dosing begins"},
            {"title": "Continued exposure", "description": "Dose not adjusted for renal function"},
            {"title": "Acute kidney injury", "description": "Creatinine doubled"},
            {"title": "Recovery", "description": "Renal function stable after cessation"},
        ],
    }


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("chronomed")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def document() -> dict:
    return sample_document()


@pytest.fixture
def timeline_file(tmp_path):
    path = tmp_path / "timeline.json"
    path.write_text(json.dumps(sample_document()), encoding="utf-8")
    return path
