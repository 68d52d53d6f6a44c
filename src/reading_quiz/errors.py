"""Exception types raised by the quiz SDK.

Server-side errors are terminal per request.  The two the client must tell
apart are:

  - SessionNotFoundError: the session id is unknown (expired or never
    existed); retrying is pointless, start a new session.
  - QuestionMismatchError: the submitted question id is not the session's
    current question; resynchronize with ``next_question`` and retry.

``InvalidTransitionError`` is client-side only and is raised when a caller
unwraps a rejected phase transition.
"""


class QuizError(Exception):
    """Base class for all quiz errors."""


class SessionNotFoundError(QuizError, LookupError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: session_id={session_id}")
        self.session_id = session_id


class PlaceNotFoundError(QuizError, LookupError):
    def __init__(self, place_id: int) -> None:
        super().__init__(f"Place not found: place_id={place_id}")
        self.place_id = place_id


class QuestionMismatchError(QuizError, ValueError):
    """The submitted question is not the session's current question."""

    def __init__(
        self, session_id: str, expected: int | None, submitted: int
    ) -> None:
        super().__init__(
            f"question_id does not match current question: "
            f"session_id={session_id}, expected={expected}, submitted={submitted}"
        )
        self.session_id = session_id
        self.expected = expected
        self.submitted = submitted


class EmptyCatalogError(QuizError):
    """No places are available to build a session from."""

    def __init__(self) -> None:
        super().__init__("Place catalog is empty")


class InvalidTransitionError(QuizError):
    """A client phase transition was attempted from a phase that forbids it."""

    def __init__(self, action: str, phase: str, reason: str) -> None:
        super().__init__(f"Cannot {action} from phase '{phase}': {reason}")
        self.action = action
        self.phase = phase
        self.reason = reason
