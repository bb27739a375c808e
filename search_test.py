import logging
import unittest

from fraction import Fraction as F
from integers import UNBOUNDED, WidthOverflowError, get_width
from search import MatchPolicy, PowerSearch, SearchConfig, reduce_into_range, truncate_decimals


class TestReduce(unittest.TestCase):
    def test_halves_into_range(self):
        self.assertEqual(reduce_into_range(F(9, 4)), (F(9, 8), 1))
        self.assertEqual(reduce_into_range(F(8)), (F(1), 3))
        self.assertEqual(reduce_into_range(F(3, 2)), (F(3, 2), 0))
        self.assertEqual(reduce_into_range(F(6561, 256)), (F(6561, 4096), 4))

    def test_doubles_into_range(self):
        self.assertEqual(reduce_into_range(F(1, 3)), (F(4, 3), -2))

    def test_zero(self):
        with self.assertRaises(ValueError):
            reduce_into_range(F(0))

    def test_truncate_decimals(self):
        self.assertEqual(truncate_decimals(F(6561, 4096), 1), 16)
        self.assertEqual(truncate_decimals(F(27, 16), 1), 16)
        self.assertEqual(truncate_decimals(F(27, 16), 3), 1687)
        self.assertEqual(truncate_decimals(F(3, 2), 0), 1)


class TestSearchConfig(unittest.TestCase):
    def test_defaults(self):
        c = SearchConfig()
        self.assertEqual(c.base, F(3, 2))
        self.assertIs(c.policy, MatchPolicy.EXACT)

    def test_from_mapping(self):
        c = SearchConfig.from_mapping({"base": "6/4", "policy": "approx", "decimals": "2", "max_power": "10"})
        self.assertEqual(c.base, F(3, 2))
        self.assertIs(c.policy, MatchPolicy.APPROXIMATE)
        self.assertEqual(c.decimals, 2)
        self.assertEqual(c.max_power, 10)

    def test_from_mapping_width(self):
        c = SearchConfig.from_mapping({"width": "unbounded"})
        self.assertEqual(c.width, UNBOUNDED)
        self.assertEqual(c.base.width, UNBOUNDED)

    def test_invalid(self):
        for data, err in [
            ({"policy": "fuzzy"}, ValueError),
            ({"base": "0"}, ValueError),
            ({"base": "three halves"}, ValueError),
            ({"max_power": 0}, ValueError),
            ({"decimals": -1}, ValueError),
            ({"width": "u7"}, NotImplementedError),
        ]:
            with self.subTest(f"data={data}"):
                with self.assertRaises(err):
                    SearchConfig.from_mapping(data)


class TestPowerSearch(unittest.TestCase):
    def setUp(self):
        self.lines = []

    def test_first_step(self):
        result = PowerSearch(SearchConfig(max_power=2)).run(emit=self.lines.append)
        self.assertEqual(self.lines, ["Power 2: 9/8"])
        self.assertFalse(result.found)
        self.assertEqual(result.seen, [F(3, 2), F(9, 8)])

    def test_exact_repeat(self):
        result = PowerSearch(SearchConfig(base=F(2), max_power=5)).run(emit=self.lines.append)
        self.assertEqual(self.lines, ["Power 2: 1/1", "FOUND IT! It's 0 and 2"])
        self.assertTrue(result.found)
        self.assertEqual((result.index, result.power, result.value), (0, 2, F(1)))

    def test_approximate_repeat(self):
        config = SearchConfig(max_power=20, policy=MatchPolicy.APPROXIMATE, decimals=1)
        result = PowerSearch(config).run(emit=self.lines.append)
        self.assertEqual(self.lines[-1], "FOUND IT! It's 2 and 8")
        self.assertEqual(self.lines[5], "Power 7: 2187/2048")
        self.assertEqual(result.value, F(6561, 4096))
        self.assertEqual(result.seen[result.index], F(27, 16))

    def test_exact_never_repeats_for_three_halves(self):
        result = PowerSearch(SearchConfig(max_power=40)).run(emit=self.lines.append)
        self.assertFalse(result.found)
        self.assertEqual(len(result.seen), 40)
        self.assertEqual(len(self.lines), 39)

    def test_overflow_propagates(self):
        with self.assertRaises(WidthOverflowError):
            PowerSearch(SearchConfig(max_power=90)).run(emit=self.lines.append)
        self.assertEqual(self.lines[-1].split(":")[0], "Power 80")

    def test_narrow_width(self):
        u32 = get_width("u32")
        config = SearchConfig(base=F(3, 2, u32), max_power=30, width=u32)
        with self.assertRaises(WidthOverflowError):
            PowerSearch(config).run(emit=self.lines.append)

    def test_width_applies_to_default_base(self):
        u32 = get_width("u32")
        config = SearchConfig(max_power=30, width=u32)
        self.assertEqual(config.base.width, u32)
        self.assertEqual(config.base, F(3, 2))
        with self.assertRaises(WidthOverflowError):
            PowerSearch(config).run(emit=self.lines.append)
        self.assertEqual(self.lines[-1].split(":")[0], "Power 20")

    def test_base_outside_width(self):
        with self.assertRaises(WidthOverflowError):
            SearchConfig(base=F(300, 7), width=get_width("u8"))

    def test_logs_reductions(self):
        logger = logging.getLogger("powercycle.search.test")
        with self.assertLogs(logger, level="DEBUG") as logs:
            PowerSearch(SearchConfig(max_power=3), logger).run(emit=self.lines.append)
        self.assertEqual(logs.output[:3], [
            "DEBUG:powercycle.search.test:Base 3/2 reduced to 3/2",
            "DEBUG:powercycle.search.test:Power 2 folded with 1 halvings",
            "DEBUG:powercycle.search.test:Power 3 folded with 1 halvings",
        ])
        self.assertEqual(logs.output[-1], "INFO:powercycle.search.test:No repeat up to power 3")

    def test_logs_match(self):
        logger = logging.getLogger("powercycle.search.test")
        with self.assertLogs(logger, level="INFO") as logs:
            PowerSearch(SearchConfig(base=F(4), max_power=3), logger).run(emit=self.lines.append)
        self.assertIn("Power 2 repeats 1/1 (index 0)", logs.output[-1])
