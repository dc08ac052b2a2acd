"""Tests for git_manager.workflow.fsm module."""

import pytest
from transitions import MachineError

from git_manager.workflow.fsm import (
    ReleaseFSM,
    STATES,
    TERMINAL_STATES,
    TRANSITIONS,
)


class TestFSMStates:
    """Tests for FSM state definitions."""

    def test_all_states_defined(self):
        expected = [
            "start", "selected", "confirmed", "merging_main", "merging_develop",
            "publishing", "cleaning_up", "completed", "cancelled",
            "aborted_on_conflict", "aborted_on_precondition", "failed",
        ]
        assert set(STATES) == set(expected)

    def test_terminal_states_have_no_outgoing_transitions(self):
        sources = set()
        for t in TRANSITIONS:
            src = t["source"]
            sources.update(src if isinstance(src, list) else [src])
        assert not sources & TERMINAL_STATES


class TestFSMPaths:
    """Walk the run paths."""

    def test_happy_path(self):
        fsm = ReleaseFSM("release")
        assert fsm.state == "start"
        for trigger in ("select", "confirm", "merge_main", "merge_develop", "publish", "clean_up", "complete"):
            getattr(fsm, trigger)()
        assert fsm.state == "completed"
        assert fsm.is_finished

    def test_no_candidates(self):
        fsm = ReleaseFSM("hotfix")
        fsm.no_candidates()
        assert fsm.state == "aborted_on_precondition"

    def test_decline_before_any_mutation(self):
        fsm = ReleaseFSM("release")
        fsm.select()
        fsm.decline()
        assert fsm.state == "cancelled"

    @pytest.mark.parametrize("merges", [["merge_main"], ["merge_main", "merge_develop"]])
    def test_conflict_from_either_merge(self, merges):
        fsm = ReleaseFSM("release")
        fsm.select()
        fsm.confirm()
        for trigger in merges:
            getattr(fsm, trigger)()
        fsm.conflict()
        assert fsm.state == "aborted_on_conflict"

    def test_fail_during_cleanup(self):
        fsm = ReleaseFSM("hotfix")
        for trigger in ("select", "confirm", "merge_main", "merge_develop", "publish", "clean_up"):
            getattr(fsm, trigger)()
        fsm.fail()
        assert fsm.state == "failed"

    def test_cannot_publish_before_merging(self):
        fsm = ReleaseFSM("release")
        fsm.select()
        fsm.confirm()
        assert not fsm.can("publish")
        with pytest.raises(MachineError):
            fsm.publish()

    def test_cannot_fail_before_confirmation(self):
        fsm = ReleaseFSM("release")
        assert "fail" not in fsm.get_available_triggers()


class TestFSMCallbacks:

    def test_on_transition_callback(self):
        seen = []
        fsm = ReleaseFSM("release", on_transition=lambda src, dst, trig: seen.append((src, dst, trig)))
        fsm.select()
        assert seen == [("start", "selected", "select")]

    def test_transitions_are_logged(self, caplog):
        fsm = ReleaseFSM("hotfix")
        with caplog.at_level("INFO", logger="git_manager.workflow.fsm"):
            fsm.select()
        assert "[finish-hotfix] start -> selected (select)" in caplog.text
