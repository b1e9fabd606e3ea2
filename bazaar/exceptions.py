class BazaarError(Exception):
    """Base class for errors raised by the service layer."""
    detail = "Request could not be completed."

    def __init__(self, detail: str = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


class NotFoundError(BazaarError):
    """The referenced entity or relation does not exist."""
    detail = "Not found."


class ConflictError(BazaarError):
    """The operation would violate a uniqueness rule."""
    detail = "Conflict."


class AlreadyFriendsError(ConflictError):
    detail = "Users are already friends."


class RequestAlreadyExistsError(ConflictError):
    detail = "A pending friend request already exists between these users."


class SelfFriendingError(ConflictError):
    detail = "Cannot send a friend request to yourself."


class DuplicateNameError(ConflictError):
    detail = "A collection with this name already exists."


class NotAllowedError(BazaarError):
    """The caller is not allowed to perform the operation."""
    detail = "Not allowed."
