"""
Base class for configurable detectors and trackers.
"""


class BaseSparseMethod:
    """Attribute-configured object with key/value parameter overrides."""

    def __init__(self):
        self.display = False

    def parse_input_parameter(self, params):
        """Set parameters from a dictionary or list of key-value pairs.

        Keys that are not attributes of the object are ignored, as is any
        other kind of ``params`` (including None).

        Args:
            params: dict or list of [key, value, key, value, ...].
        """
        if isinstance(params, dict):
            for key, val in params.items():
                if isinstance(key, str) and hasattr(self, key):
                    setattr(self, key, val)
        elif isinstance(params, (list, tuple)):
            i = 0
            while i < len(params) - 1:
                key = params[i]
                val = params[i + 1]
                if isinstance(key, str) and hasattr(self, key):
                    setattr(self, key, val)
                i += 2
