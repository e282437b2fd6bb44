from .utils import owner_id_from


class OwnerScopedMixin:
    """
    Restrict a view to records of the authenticated owner.

    Records of other owners are invisible, so fetching one by id yields a
    404 rather than a 403.
    """

    @property
    def owner_id(self):
        return owner_id_from(self.request.user)

    def get_queryset(self):
        return super().get_queryset().filter(owner_id=self.owner_id)
