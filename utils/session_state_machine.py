"""
Payment Session State Machine for converging a payment page to exactly one outcome.

Several independent sources (the order subscription, the gateway poll loop and
the countdown timer) may each report a terminal condition, in any order. Every
report goes through this state machine; only the first one that leaves PENDING
is applied, every later one is a no-op.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from enums.session_state import SessionState
from enums.status_source import StatusSource

logger = logging.getLogger(__name__)


class SessionStateTransition:
    """Represents a valid state transition and the sources allowed to trigger it"""

    def __init__(self, from_state: SessionState, to_state: SessionState,
                 sources: Set[StatusSource], description: str = ""):
        self.from_state = from_state
        self.to_state = to_state
        self.sources = sources
        self.description = description

    def __repr__(self):
        sources = ", ".join(sorted(source.value for source in self.sources))
        return f"{self.from_state.value} -> {self.to_state.value} ({sources})"


class SessionStateMachine:
    """
    Finite state machine for payment session states.

    Valid transitions:
    - PENDING -> SUCCEEDED (listener or poll reports success/completed)
    - PENDING -> FAILED (listener or poll reports failed, includes cancellation)
    - PENDING -> EXPIRED (countdown reached zero)
    - PENDING -> NOT_FOUND (listener found no order document)

    Every other state is final.
    """

    VALID_TRANSITIONS: List[SessionStateTransition] = [
        SessionStateTransition(
            SessionState.PENDING,
            SessionState.SUCCEEDED,
            sources={StatusSource.LISTENER, StatusSource.POLL},
            description="Payment confirmed"
        ),
        SessionStateTransition(
            SessionState.PENDING,
            SessionState.FAILED,
            sources={StatusSource.LISTENER, StatusSource.POLL},
            description="Payment failed or was cancelled"
        ),
        SessionStateTransition(
            SessionState.PENDING,
            SessionState.EXPIRED,
            sources={StatusSource.COUNTDOWN},
            description="Payment window elapsed"
        ),
        SessionStateTransition(
            SessionState.PENDING,
            SessionState.NOT_FOUND,
            sources={StatusSource.LISTENER},
            description="Order document does not exist"
        ),
    ]

    _transition_map: Dict[Tuple[SessionState, SessionState], SessionStateTransition] = {}

    @classmethod
    def _build_transition_map(cls):
        if cls._transition_map:
            return
        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map[(transition.from_state, transition.to_state)] = transition

    @classmethod
    def is_valid_transition(cls, from_state: SessionState, to_state: SessionState,
                            source: StatusSource) -> bool:
        """
        Check if a source may move the session from one state to another.

        Args:
            from_state: Current session state
            to_state: Desired new state
            source: Which status source observed the condition

        Returns:
            True if transition is valid, False otherwise
        """
        cls._build_transition_map()
        transition = cls._transition_map.get((from_state, to_state))
        return transition is not None and source in transition.sources

    @classmethod
    def get_valid_transitions(cls, from_state: SessionState) -> List[SessionState]:
        cls._build_transition_map()
        return [to_state for (state, to_state) in cls._transition_map if state == from_state]

    @classmethod
    def is_final_state(cls, state: SessionState) -> bool:
        return not cls.get_valid_transitions(state)

    @classmethod
    def transition(cls, order_id: str, from_state: SessionState, to_state: SessionState,
                   source: StatusSource) -> Optional[SessionState]:
        """
        Apply a transition if it is valid.

        A report that arrives after the session already left PENDING is the
        normal outcome of two sources racing, so it is logged at DEBUG only.

        Returns:
            The new state, or None when the report was ignored
        """
        if not cls.is_valid_transition(from_state, to_state, source):
            if from_state.is_terminal:
                logger.debug(f"Ignoring {to_state.value} from {source.value} for order {order_id}: "
                             f"already {from_state.value}")
            else:
                logger.error(f"Invalid session transition for order {order_id}: "
                             f"{from_state.value} -> {to_state.value} by {source.value}")
            return None

        description = cls._transition_map[(from_state, to_state)].description
        logger.info(f"SESSION_STATE_TRANSITION: Order {order_id} {from_state.value} -> {to_state.value} "
                    f"by {source.value}: {description}")
        return to_state
