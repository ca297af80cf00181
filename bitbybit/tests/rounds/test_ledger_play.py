"""Adding shots and holing out on the shot ledger."""

from __future__ import annotations

import pytest

from bitbybit.courses.models import Hole
from bitbybit.rounds.ledger import (
    HoleState,
    LedgerPreconditionError,
    ShotLedger,
    ShotValidationError,
)
from bitbybit.sg.curves import expected_strokes
from bitbybit.sg.schemas import LieCategory, Shot


def _ledger(distance: float = 350.0, par: int = 4) -> ShotLedger:
    return ShotLedger(1, hole=Hole(number=1, par=par, distance=distance))


def _open_shots(ledger: ShotLedger) -> list[int]:
    return [s.shot_number for s in ledger.shots if not s.completed]


def test_configured_hole_creates_tee_shot() -> None:
    ledger = _ledger()

    assert ledger.state is HoleState.AWAITING_FIRST_SHOT
    (tee_shot,) = ledger.shots
    assert tee_shot.shot_number == 1
    assert tee_shot.lie is LieCategory.TEE
    assert tee_shot.distance_to_hole == 350.0
    assert tee_shot.completed is False
    assert tee_shot.strokes_gained is None


def test_unconfigured_hole_waits_for_hole_data() -> None:
    ledger = ShotLedger(4, hole=Hole(number=4, par=4, distance=0))

    assert ledger.state is HoleState.NO_HOLE_DATA
    assert ledger.shots == ()
    with pytest.raises(LedgerPreconditionError):
        ledger.add_shot(LieCategory.FAIRWAY, 100)


def test_set_hole_data_creates_tee_shot() -> None:
    ledger = ShotLedger(2)

    ledger.set_hole_data("410", 4)

    assert ledger.state is HoleState.AWAITING_FIRST_SHOT
    assert ledger.hole is not None and ledger.hole.par == 4
    assert ledger.shots[0].distance_to_hole == 410.0


@pytest.mark.parametrize(
    "distance, par",
    [("", 4), ("abc", 4), ("0", 4), (-20, 4), (380, None), (380, 6), (380, True)],
)
def test_set_hole_data_validation(distance, par) -> None:
    ledger = ShotLedger(2)

    with pytest.raises(ShotValidationError):
        ledger.set_hole_data(distance, par)

    assert ledger.state is HoleState.NO_HOLE_DATA
    assert ledger.hole is None


def test_add_shot_chains_from_tee() -> None:
    ledger = _ledger()

    second = ledger.add_shot(LieCategory.FAIRWAY, 100)

    first = ledger.shots[0]
    assert first.distance_traveled == pytest.approx(250.0)
    assert first.completed is True
    assert first.strokes_gained == pytest.approx(
        round(
            expected_strokes(LieCategory.TEE, 350)
            - (1 + expected_strokes(LieCategory.FAIRWAY, 100)),
            2,
        )
    )
    assert second.shot_number == 2
    assert second.lie is LieCategory.FAIRWAY
    assert second.distance_to_hole == 100.0
    assert second.completed is False
    assert second.strokes_gained is None
    assert ledger.state is HoleState.IN_PROGRESS


def test_complete_hole_closes_out_last_shot() -> None:
    ledger = _ledger()
    ledger.add_shot(LieCategory.FAIRWAY, 100)

    last = ledger.complete_hole()

    assert last.distance_traveled == pytest.approx(100.0)
    assert last.completed is True
    assert last.strokes_gained == pytest.approx(
        round(expected_strokes(LieCategory.FAIRWAY, 100) - 1, 2)
    )
    assert ledger.shots[0].strokes_gained == pytest.approx(0.8)
    assert ledger.state is HoleState.COMPLETED
    assert all(s.completed for s in ledger.shots)


def test_green_entry_is_stored_in_yards() -> None:
    ledger = _ledger()
    ledger.add_shot(LieCategory.FAIRWAY, 100)

    putt = ledger.add_shot(LieCategory.GREEN, 30)

    assert putt.distance_to_hole == pytest.approx(10.0)
    assert ledger.shots[1].distance_traveled == pytest.approx(90.0)


def test_chip_off_the_green_chains_in_yards() -> None:
    ledger = _ledger(distance=160.0, par=3)
    ledger.add_shot(LieCategory.GREEN, 45)  # 15 yards
    ledger.add_shot(LieCategory.ROUGH, 8)

    putt, chip = ledger.shots[1], ledger.shots[2]
    assert putt.distance_traveled == pytest.approx(7.0)
    assert chip.distance_to_hole == 8.0


def test_distance_traveled_never_negative() -> None:
    ledger = _ledger(distance=150.0, par=3)

    ledger.add_shot(LieCategory.RECOVERY, 170)

    assert ledger.shots[0].distance_traveled == 0.0


def test_full_hole_with_three_putt() -> None:
    ledger = _ledger(distance=420.0)
    ledger.add_shot("Fairway", "160")
    ledger.add_shot("Green", "40")
    ledger.add_shot("Green", "6")
    ledger.add_shot("Green", "1")
    ledger.complete_hole()

    shots = ledger.shots
    assert [s.shot_number for s in shots] == [1, 2, 3, 4, 5]
    assert all(s.strokes_gained is not None for s in shots)
    assert shots[-1].strokes_gained == pytest.approx(
        round(expected_strokes(LieCategory.GREEN, 1 / 3) - 1, 2)
    )
    putting = sum(s.strokes_gained for s in shots[2:])
    assert putting < 0


def test_hole_in_one() -> None:
    ledger = _ledger(distance=165.0, par=3)

    ace = ledger.complete_hole()

    assert ace.distance_traveled == 165.0
    assert ace.strokes_gained == pytest.approx(
        round(expected_strokes(LieCategory.TEE, 165.0) - 1, 2)
    )
    assert ledger.state is HoleState.COMPLETED


@pytest.mark.parametrize("distance", ["", "  ", "far", -1, None, float("nan")])
def test_add_shot_rejects_bad_distance(distance) -> None:
    ledger = _ledger()
    before = ledger.shots

    with pytest.raises(ShotValidationError):
        ledger.add_shot(LieCategory.FAIRWAY, distance)

    assert ledger.shots == before
    assert _open_shots(ledger) == [1]


@pytest.mark.parametrize("lie", [None, "", "water"])
def test_add_shot_requires_lie(lie) -> None:
    ledger = _ledger()

    with pytest.raises(ShotValidationError):
        ledger.add_shot(lie, 100)

    assert len(ledger.shots) == 1


def test_add_shot_after_completion_is_rejected() -> None:
    ledger = _ledger()
    ledger.complete_hole()

    with pytest.raises(LedgerPreconditionError):
        ledger.add_shot(LieCategory.GREEN, 10)
    with pytest.raises(LedgerPreconditionError):
        ledger.complete_hole()

    assert len(ledger.shots) == 1


def test_complete_hole_requires_shots() -> None:
    with pytest.raises(LedgerPreconditionError):
        ShotLedger(3).complete_hole()


def test_only_last_shot_is_open_after_each_add() -> None:
    ledger = _ledger(distance=510.0, par=5)
    for lie, distance in [
        (LieCategory.ROUGH, 260),
        (LieCategory.FAIRWAY, 95),
        (LieCategory.SAND, 12),
        (LieCategory.GREEN, 9),
    ]:
        ledger.add_shot(lie, distance)
        assert _open_shots(ledger) == [len(ledger.shots)]
        assert all(s.strokes_gained is not None for s in ledger.shots[:-1])
        assert ledger.shots[-1].strokes_gained is None


def test_loaded_shots_are_sorted_and_state_restored() -> None:
    ledger = _ledger()
    ledger.add_shot(LieCategory.FAIRWAY, 100)
    ledger.complete_hole()

    reloaded = ShotLedger(1, reversed(ledger.shots))

    assert [s.shot_number for s in reloaded.shots] == [1, 2]
    assert reloaded.state is HoleState.COMPLETED


def test_loaded_shots_must_match_hole() -> None:
    ledger = _ledger()
    with pytest.raises(ValueError):
        ShotLedger(2, ledger.shots)


def test_hole_data_must_match_hole() -> None:
    with pytest.raises(ValueError):
        ShotLedger(1, hole=Hole(number=5, par=3, distance=160.0))


def _stored_shot(number: int, lie: LieCategory, distance: float, **extra) -> Shot:
    return Shot(
        hole_number=1,
        shot_number=number,
        lie=lie,
        distance_to_hole=distance,
        **extra,
    )


def test_loaded_shots_must_be_numbered_from_one() -> None:
    gapped = [
        _stored_shot(1, LieCategory.TEE, 350.0, completed=True),
        _stored_shot(3, LieCategory.FAIRWAY, 100.0),
    ]
    with pytest.raises(ValueError):
        ShotLedger(1, gapped)


def test_loaded_shots_only_last_may_be_open() -> None:
    shots = [
        _stored_shot(1, LieCategory.TEE, 350.0),
        _stored_shot(2, LieCategory.FAIRWAY, 100.0),
    ]
    with pytest.raises(ValueError):
        ShotLedger(1, shots)


def test_loaded_shots_get_derived_fields_rebuilt() -> None:
    shots = [
        _stored_shot(1, LieCategory.TEE, 350.0, completed=True),
        _stored_shot(
            2, LieCategory.FAIRWAY, 100.0, distance_traveled=12.0, strokes_gained=9.9
        ),
    ]

    ledger = ShotLedger(1, shots)
    tee_shot, approach = ledger.shots

    assert tee_shot.distance_traveled == 250.0
    assert tee_shot.strokes_gained == round(
        expected_strokes(LieCategory.TEE, 350.0)
        - (1 + expected_strokes(LieCategory.FAIRWAY, 100.0)),
        2,
    )
    assert approach.distance_traveled is None
    assert approach.strokes_gained is None

    ledger.add_shot(LieCategory.GREEN, 9)
    assert [s.shot_number for s in ledger.shots] == [1, 2, 3]
