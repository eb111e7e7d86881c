from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from service_desk.models import Base


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def review_message() -> dict:
    return {
        "number": 17,
        "description": (
            "Mam na panów złą wiadomość. Zapraszam na ponowny przegląd maty "
            "zabezpieczającej w meblu kasowym. Ostatnio był a sprzęt niestety nie działa, pilne!"
        ),
        "dueDate": "2020-03-02 00:00:00",
        "phone": "+48505167301",
    }


@pytest.fixture
def failure_report_message() -> dict:
    return {
        "number": 15,
        "description": "Krajalnice mięso. Nie działa tarczka głównej maszyny bardzo pilne.",
        "dueDate": "",
        "phone": "888241636",
    }
