class ConfigurationError(RuntimeError):
    """Raised when a collection is used without the configuration it needs.

    Most commonly this means `max_count` has not been set to a finite number yet.
    """
