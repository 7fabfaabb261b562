"""Tests for reverse-import chain enumeration."""

from deadwood.analysis import ChainTracer


class TestChainTracer:
    def test_orphan_is_its_own_root(self):
        trace = ChainTracer({"a": ()}).trace("a")
        assert trace.chains == (("a",),)
        assert trace.cycles == ()
        assert not trace.truncated

    def test_unknown_module_treated_as_root(self):
        assert ChainTracer({}).trace("ghost").chains == (("ghost",),)

    def test_linear_chain(self):
        reverse = {"c": ("b",), "b": ("a",), "a": ()}
        assert ChainTracer(reverse).trace("c").chains == (("c", "b", "a"),)

    def test_diamond_enumerates_every_path(self):
        reverse = {"d": ("b", "c"), "b": ("a",), "c": ("a",), "a": ()}
        trace = ChainTracer(reverse).trace("d")
        assert trace.chains == (("d", "b", "a"), ("d", "c", "a"))

    def test_chain_invariants(self):
        reverse = {"x": ("p", "q"), "p": ("r",), "q": ("r", "s"), "r": (), "s": ()}
        for chain in ChainTracer(reverse).trace("x").chains:
            assert chain[0] == "x"
            assert reverse[chain[-1]] == ()
            assert len(set(chain)) == len(chain)
            for child, importer in zip(chain, chain[1:]):
                assert importer in reverse[child]

    def test_cycle_recorded_separately(self):
        reverse = {"a": ("b",), "b": ("a",)}
        trace = ChainTracer(reverse).trace("a")
        assert trace.chains == ()
        assert trace.cycles == (("a", "b", "a"),)

    def test_cycle_branch_does_not_block_siblings(self):
        # b is imported by c (which loops back) and by root
        reverse = {"a": ("b",), "b": ("c", "root"), "c": ("b",), "root": ()}
        trace = ChainTracer(reverse).trace("a")
        assert trace.chains == (("a", "b", "root"),)
        assert trace.cycles == (("a", "b", "c", "b"),)

    def test_max_chains_truncates(self, caplog):
        reverse = {"t": ("a", "b", "c"), "a": (), "b": (), "c": ()}
        trace = ChainTracer(reverse, max_chains=2).trace("t")
        assert trace.chains == (("t", "a"), ("t", "b"))
        assert trace.truncated
        assert "stopped early" in caplog.text

    def test_max_chains_exactly_reached_is_not_truncated(self):
        reverse = {"t": ("a", "b"), "a": (), "b": ()}
        trace = ChainTracer(reverse, max_chains=2).trace("t")
        assert len(trace.chains) == 2
        assert not trace.truncated

    def test_max_depth_cuts_long_branches(self):
        reverse = {"d": ("c",), "c": ("b",), "b": ("a",), "a": (), "x": ()}
        trace = ChainTracer(reverse, max_depth=2).trace("d")
        assert trace.chains == ()
        assert trace.truncated

    def test_wide_fan_in_terminates(self):
        # Layered graph with 2**10 distinct paths
        reverse = {"n0": ()}
        for i in range(1, 11):
            reverse[f"n{i}"] = (f"n{i - 1}", f"m{i - 1}")
            reverse[f"m{i}"] = (f"n{i - 1}", f"m{i - 1}")
        reverse["m0"] = ()
        trace = ChainTracer(reverse, max_chains=100).trace("n10")
        assert len(trace.chains) == 100
        assert trace.truncated
