"""Domain exceptions raised by the services and translated to HTTP errors in api/."""


class InvalidCredentialsError(Exception):
    """Unknown email, ambiguous email or wrong password. Deliberately not distinguished."""


class DraftNotFoundError(LookupError):
    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id!r} not found")
        self.draft_id = draft_id


class DraftCorruptedError(ValueError):
    """The stored JSON snapshot of a draft cannot be parsed."""


class GoogleServiceError(Exception):
    """A Sheets or Drive call failed, or the service account is not usable."""


class GoogleCredentialsError(GoogleServiceError):
    pass
