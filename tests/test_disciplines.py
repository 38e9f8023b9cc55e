from __future__ import annotations

from pathlib import Path

import pytest

from edustats.config import EduStatsSettings
from edustats.processing.disciplines import DisciplineTable, fold, is_masters_program


@pytest.mark.parametrize(
    "program",
    [
        "Master Informatique",
        "MSc Data Science",
        "Mastère spécialisé finance",
        "M2 Droit des affaires",
        "Masters in Finance",
        "Global Masters in Management",
    ],
)
def test_masters_programs_are_detected(program: str) -> None:
    assert is_masters_program(program)


@pytest.mark.parametrize("program", ["Licence Informatique", "BTS Commerce", "Bachelor in Management", "Mastermind"])
def test_other_programs_are_not_masters(program: str) -> None:
    assert not is_masters_program(program)


def test_fold_strips_accents_and_case() -> None:
    assert fold("  Économie   Appliquée ") == "economie appliquee"


def test_first_matching_entry_wins() -> None:
    table = DisciplineTable.from_dict(
        {
            "disciplines": [
                {"label": "Informatique", "keywords": ["data"]},
                {"label": "Mathématiques", "keywords": ["statistique", "data"]},
            ]
        }
    )

    assert table.match("Master Data & Statistique") == "Informatique"
    assert table.match("Master Statistique") == "Mathématiques"
    assert table.match("Master Histoire") is None


def test_bundled_table_maps_common_programs() -> None:
    table = DisciplineTable.load(EduStatsSettings().tables.disciplines_path)

    assert len(table) > 0
    assert table.match("Master Économie et finance") == "Sciences économiques"
    assert table.match("Master Droit public") == "Droit"
    assert table.match("Master Transformation des organisations") == "Sciences de gestion"
    assert table.match("Master Systèmes d'information") == "Informatique"
    assert table.match("Master Systèmes d\u2019information") == "Informatique"
    assert table.match("Master Ingénierie de la formation") == "Sciences de l'éducation"


def test_missing_table_matches_nothing(tmp_path: Path) -> None:
    table = DisciplineTable.load(tmp_path / "absent.json")

    assert len(table) == 0
    assert table.match("Master Informatique") is None
