"""Finish-release state machine using the transitions library.

Tracks where a finish-release or finish-hotfix run is, so that every way the
run can end is an explicit terminal state rather than an early return:

    start -> selected -> confirmed -> merging_main -> merging_develop
          -> publishing -> cleaning_up -> completed

with the side exits cancelled, aborted_on_conflict, aborted_on_precondition
and failed. State lives only for the duration of one run.

Usage:
    from git_manager.workflow.fsm import ReleaseFSM

    fsm = ReleaseFSM("hotfix")
    fsm.select()
    fsm.confirm()
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)


STATES = [
    "start",
    "selected",
    "confirmed",
    "merging_main",
    "merging_develop",
    "publishing",
    "cleaning_up",
    "completed",
    "cancelled",
    "aborted_on_conflict",
    "aborted_on_precondition",
    "failed",
]

TERMINAL_STATES = {
    "completed",
    "cancelled",
    "aborted_on_conflict",
    "aborted_on_precondition",
    "failed",
}

# States a run passes through while mutating the repository
_MUTATING_STATES = ["confirmed", "merging_main", "merging_develop", "publishing", "cleaning_up"]

TRANSITIONS = [
    # Picking the branch to finish
    {"trigger": "select", "source": "start", "dest": "selected"},
    {"trigger": "no_candidates", "source": "start", "dest": "aborted_on_precondition"},
    {"trigger": "missing_main", "source": "selected", "dest": "aborted_on_precondition"},

    # User decision before any mutation
    {"trigger": "confirm", "source": "selected", "dest": "confirmed"},
    {"trigger": "decline", "source": "selected", "dest": "cancelled"},

    # Merges
    {"trigger": "merge_main", "source": "confirmed", "dest": "merging_main"},
    {"trigger": "merge_develop", "source": "merging_main", "dest": "merging_develop"},
    {"trigger": "conflict", "source": ["merging_main", "merging_develop"], "dest": "aborted_on_conflict"},

    # Tag + push, then branch removal
    {"trigger": "publish", "source": "merging_develop", "dest": "publishing"},
    {"trigger": "clean_up", "source": "publishing", "dest": "cleaning_up"},
    {"trigger": "complete", "source": "cleaning_up", "dest": "completed"},

    # Any git failure after confirmation
    {"trigger": "fail", "source": _MUTATING_STATES, "dest": "failed"},
]


class ReleaseFSM:
    """State machine for one finish-release or finish-hotfix run.

    Wraps the transitions library:
    - Starts in "start" on every run (no persisted state)
    - Logs all transitions
    - Exposes the terminal outcome via is_finished
    """

    def __init__(self, release_type: str, on_transition: Callable[[str, str, str], None] | None = None):
        """Initialize FSM for a run.

        Args:
            release_type: "release" or "hotfix", used in log messages
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        self.release_type = release_type
        self.branch: str | None = None
        self.on_transition = on_transition

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="start",
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        """Callback after any state transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.info(f"[finish-{self.release_type}] {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def get_available_triggers(self) -> list[str]:
        """Get list of triggers available in current state."""
        return self.machine.get_triggers(self.state)
