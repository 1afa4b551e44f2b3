"""
Helpers shared by the SSH session and channel code.
"""


def error_message(error: BaseException) -> str:
    """
    Get the human-readable text of an error.

    asyncssh errors carry the server's text in ``reason``; anything else
    falls back to ``str()`` and finally to the exception class name.
    """
    reason = getattr(error, "reason", None)
    if reason:
        return str(reason)
    return str(error) or error.__class__.__name__
