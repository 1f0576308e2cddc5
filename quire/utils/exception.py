class InvalidForwardRequest(Exception):
    """
    Raised by the primary instance when a request received
    from a secondary instance cannot be decoded
    """

    pass


class SettingsLoadError(Exception):
    """
    Raised when the settings file exists but is not
    a valid settings document
    """

    pass
