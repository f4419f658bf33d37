from pathviz.core.path import reconstruct


class FakeResult:
    def __init__(self, parents):
        self.parents = parents

    def parent(self, c):
        return self.parents.get(c)


def test_walks_back_excluding_both_endpoints():
    parents = {(3, 0): (2, 0), (2, 0): (1, 0), (1, 0): (0, 0)}
    assert reconstruct(FakeResult(parents), (0, 0), (3, 0)) == ((2, 0), (1, 0))


def test_missing_end_parent_means_unreachable():
    assert reconstruct(FakeResult({}), (0, 0), (5, 5)) == ()


def test_neighbouring_endpoints():
    assert reconstruct(FakeResult({(1, 1): (0, 0)}), (0, 0), (1, 1)) == ()
