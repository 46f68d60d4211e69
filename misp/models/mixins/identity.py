class SurrogateKeyEqualityMixin(object):
    """
    Compare persisted rows by their primary key alone.

    Two instances of the same model with the same `id` are equal no matter
    what their other columns hold. An instance that has not been assigned an
    `id` yet is only equal to itself.
    """

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.id) if self.id is not None else 0
