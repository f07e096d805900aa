class ChatClientError(Exception):
    """Base class for chat client errors."""


class SubmissionRejected(ChatClientError):
    """The query cannot be sent right now (blank, or a reply is still streaming)."""


class StreamProtocolError(ChatClientError):
    """The response is not a well-formed event stream."""
