"""Transition record contract tests."""

from __future__ import annotations

import pytest

from episode_engine.core.dynamics import TransitionRecord


def test_new_record_starts_zeroed() -> None:
    record = TransitionRecord(3)

    assert record.dimension() == 3
    assert record.o_tp1.tolist() == [0.0, 0.0, 0.0]
    assert record.r_tp1 == 0.0
    assert record.z_tp1 == 0.0
    assert record.end_of_episode is False


def test_update_rt_step_overwrites_scalars_only() -> None:
    record = TransitionRecord(2)
    record.o_tp1[:] = [4.0, 5.0]

    record.update_rt_step(1.5, -0.25, True)

    assert record.r_tp1 == 1.5
    assert record.z_tp1 == -0.25
    assert record.end_of_episode is True
    assert record.o_tp1.tolist() == [4.0, 5.0]


def test_forced_end_of_episode_touches_only_the_flag() -> None:
    record = TransitionRecord(2)
    record.update_rt_step(2.0, 3.0, False)

    record.set_forced_end_of_episode(True)

    assert record.end_of_episode is True
    assert (record.r_tp1, record.z_tp1) == (2.0, 3.0)

    record.set_forced_end_of_episode(False)
    assert record.end_of_episode is False


def test_observation_buffer_is_reused_in_place() -> None:
    record = TransitionRecord(2)
    buffer = record.o_tp1

    buffer[0] = 9.0

    assert record.o_tp1 is buffer
    assert record.o_tp1[0] == 9.0
    with pytest.raises(AttributeError):
        record.o_tp1 = buffer  # type: ignore[misc]
