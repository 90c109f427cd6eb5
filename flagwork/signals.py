# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Flagwork engine.

Signals interrupt parsing without being treated as errors. They inherit from
`FlowSignal`, a subclass of `BaseException`, so they bypass standard
`except Exception` blocks.

Signals:
- HelpSignal: Usage was rendered for a scope and the program should end successfully.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Flagwork.

    These are not errors. They're used to end parsing early, for example
    after help text has been printed.
    """


class HelpSignal(FlowSignal):
    """Raised after help output has been rendered for a scope."""

    def __init__(self, message: str = "Help signal received.", scope: str = ""):
        super().__init__(message)
        self.scope = scope
