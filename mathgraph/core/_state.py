import itertools

# Shared by every graph so ids stay unique when vertices are re-parented.
_ids = itertools.count()


def next_id() -> int:
    return next(_ids)


class _State:
    def __init__(self):
        self.version = 0

    def bump(self):
        self.version += 1

    def dirty_since(self, version: int) -> bool:
        return self.version > version
