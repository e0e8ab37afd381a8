"""Error taxonomy surfaced to callers of the captioning workflow."""


class SnapCaptionError(Exception):
    """Base error carrying a message that is safe to show to users."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SnapCaptionError):
    """Missing or malformed input; the message is shown verbatim."""

    default_message = "Invalid input"


class AuthenticationFailure(SnapCaptionError):
    """Wrong credentials; never says which part was wrong."""

    default_message = "Invalid email or password"


class DuplicateEmail(SnapCaptionError):
    """Signup with an email that is already registered."""

    default_message = "User with this email already exists"


class StorageFailure(SnapCaptionError):
    """Object store or metadata index unavailable."""

    default_message = "Failed to store image. Please try again."


class CaptionGenerationFailed(SnapCaptionError):
    """The vision model could not produce a caption."""

    default_message = "Failed to generate caption"


class MediaNotFound(SnapCaptionError):
    """Image id unknown or owned by somebody else."""

    default_message = "Image not found"
