"""
Exception hierarchy for sheetwrap.
Parsing errors are raised synchronously by the pure A1/value helpers,
everything else is raised by the orchestration layer with the failing
range or sheet named in the message and the cause chained.
"""

class SheetWrapError(Exception):
    """Base for everything raised by this package"""
    pass

class InvalidReference(SheetWrapError, ValueError):
    """An A1 reference or range string has no recognised shape"""
    pass

class InvalidColumnLetters(InvalidReference):
    """Column letters were empty or contained something other than A-Z"""
    pass

class InvalidColor(SheetWrapError, ValueError):
    """A hex color code could not be parsed"""
    pass

class ConfigError(SheetWrapError):
    """Required configuration is missing or unreadable"""
    pass

class AuthError(SheetWrapError):
    """Credentials could not be obtained for the configured account"""
    pass

class SheetNotFound(SheetWrapError, KeyError):
    """No sheet (tab) with the requested title exists in the spreadsheet"""

    def __str__(self) -> str:
        # KeyError quotes its argument, we want the plain message
        return str(self.args[0]) if self.args else ""

class SheetOperationError(SheetWrapError):
    """A remote Sheets call failed"""

    def __init__(self, message: str, operation: str = "", range: str = "") -> None:
        super().__init__(message)
        self.operation = operation
        self.range = range
