class InvalidInput(ValueError):
    """Raised when a calculation is asked to run on data it cannot accept.

    ``field`` names the offending input (``basic_salary``, ``gross_income``,
    ``incentives[bonus-1]`` ...) so the form layer can attach the message to
    the right control.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")
