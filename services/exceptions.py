class PostNotFound(LookupError):
    """Raised when a post id has no document in the collection"""

    def __init__(self, post_id: str):
        super().__init__(f"Post not found: {post_id}")
        self.post_id = post_id


class InvalidPagination(ValueError):
    """Raised when page or limit is not a positive integer"""
