"""
Unit tests for scenario orchestration.

Covers variant derivation, cross-scenario yearly comparison, the month-1
cost breakdown, the lending-vs-investing interest series and the baseline
preset.

Version: 0.2.0
Last Updated: 2026-10-18
Status: Active
"""

import unittest
from dataclasses import replace

import numpy as np

from mortgage_scenarios.financial_formulas import amortized_payment
from mortgage_scenarios.metrics import build_schedule
from mortgage_scenarios.presets import BASELINE, BASELINE_CONFIG, baseline_scenario
from mortgage_scenarios.scenarios import (
    ComparisonMetric,
    NamedScenario,
    ScenarioInputs,
    Variant,
    build_named_scenario,
    build_scenario_variants,
    compare_scenarios,
    config_for_variant,
    first_month_cost_breakdown,
    interest_earned_series,
    yearly_cumulative,
)

from utilities import CENT, family_config, vanilla_config


def family_inputs(**config_overrides) -> ScenarioInputs:
    return ScenarioInputs(
        config=replace(family_config(300_000), **config_overrides),
        down_bank_only=150_000,
        down_with_family=200_000,
    )


class TestVariants(unittest.TestCase):

    def test_bank_variant_drops_family_loan(self):
        cfg = config_for_variant(family_inputs(), Variant.BANK)
        self.assertEqual(cfg.down, 150_000)
        self.assertEqual(cfg.family.amount, 0.0)
        self.assertEqual(cfg.principal_bank, 850_000)
        # the rest of the family group is left alone
        self.assertEqual(cfg.family.rate, 4.5)

    def test_family_variant_keeps_family_loan(self):
        cfg = config_for_variant(family_inputs(), "family")
        self.assertEqual(cfg.down, 200_000)
        self.assertEqual(cfg.family.amount, 300_000)
        self.assertEqual(cfg.principal_bank, 500_000)

    def test_unknown_variant(self):
        with self.assertRaises(ValueError):
            config_for_variant(family_inputs(), "parents")

    def test_inputs_not_mutated(self):
        inputs = family_inputs()
        config_for_variant(inputs, Variant.BANK)
        self.assertEqual(inputs.config.down, 200_000)
        self.assertEqual(inputs.config.family.amount, 300_000)

    def test_variant_pair(self):
        pair = build_scenario_variants(family_inputs())
        self.assertAlmostEqual(pair.bank_only.rows[0].bank_payment,
                               round(amortized_payment(850_000, 6.3, 360), 2), places=2)
        self.assertEqual(pair.bank_only.rows[0].family_payment, 0.0)
        self.assertAlmostEqual(pair.with_family.rows[0].family_payment,
                               round(amortized_payment(300_000, 4.5, 360), 2), places=2)

    def test_named_scenario_coerces_variant(self):
        scenario = NamedScenario("Solo", family_inputs(), "bank")
        self.assertIs(scenario.variant, Variant.BANK)
        self.assertEqual(build_named_scenario(scenario).rows[0].family_payment, 0.0)


class TestYearlyCumulative(unittest.TestCase):

    def test_interest_metric_sums_debt_interest(self):
        result = build_schedule(family_config(300_000))
        values = yearly_cumulative(result, ComparisonMetric.INTEREST, years=3)
        first_year = sum(r.bank_interest + r.family_interest for r in result.rows[:12])
        self.assertEqual(values.shape, (3,))
        self.assertAlmostEqual(values[0], first_year, delta=CENT)
        self.assertTrue(np.all(np.diff(values) > 0))

    def test_household_metric(self):
        result = build_schedule(vanilla_config())
        values = yearly_cumulative(result, "household", years=2)
        self.assertAlmostEqual(values[1], sum(r.household_monthly for r in result.rows[:24]), delta=CENT)

    def test_short_projection_holds_last_value(self):
        result = build_schedule(vanilla_config(horizon_years=5))
        values = yearly_cumulative(result, ComparisonMetric.HOUSEHOLD, years=10)
        self.assertEqual(len(values), 10)
        for year in range(5, 10):
            with self.subTest(year=year + 1):
                self.assertEqual(values[year], values[4])

    def test_empty_projection_is_zero(self):
        result = build_schedule(vanilla_config(horizon_years=0))
        np.testing.assert_array_equal(yearly_cumulative(result, "interest", years=3), np.zeros(3))


class TestCompareScenarios(unittest.TestCase):

    def test_aligned_points(self):
        scenarios = [
            NamedScenario("With family", family_inputs(), Variant.FAMILY),
            NamedScenario("Bank only", family_inputs(), Variant.BANK),
        ]
        points = compare_scenarios(scenarios, ComparisonMetric.INTEREST)
        self.assertEqual(len(points), 30)
        self.assertEqual(points[0]["name"], "Y1")
        self.assertEqual(points[-1]["name"], "Y30")
        self.assertEqual(set(points[0]), {"name", "With family", "Bank only"})
        # cheaper family money means less total interest
        self.assertLess(points[-1]["With family"], points[-1]["Bank only"])

    def test_values_match_individual_runs(self):
        scenario = NamedScenario("Solo", family_inputs(), Variant.BANK)
        points = compare_scenarios([scenario], "household", years=5)
        expected = yearly_cumulative(build_named_scenario(scenario), "household", years=5)
        self.assertEqual([p["Solo"] for p in points], [float(v) for v in expected])

    def test_no_scenarios(self):
        points = compare_scenarios([], years=2)
        self.assertEqual(points, [{"name": "Y1"}, {"name": "Y2"}])


class TestCostBreakdown(unittest.TestCase):

    def test_baseline_variants(self):
        family, bank = first_month_cost_breakdown([
            baseline_scenario("Family"),
            baseline_scenario("Bank", Variant.BANK),
        ])
        self.assertEqual(family.name, "Family")
        self.assertAlmostEqual(family.bank, 3094.86, places=2)
        self.assertAlmostEqual(family.family, 1520.06, places=2)
        self.assertEqual(family.pmi, 0.0)
        self.assertEqual(bank.family, 0.0)
        self.assertAlmostEqual(bank.pmi, 425.0, places=2)
        for entry in (family, bank):
            with self.subTest(name=entry.name):
                self.assertAlmostEqual(entry.tax, 1_000.0, places=2)
                self.assertAlmostEqual(entry.insurance, 166.67, places=2)
                self.assertEqual(entry.hoa, 90.0)
                self.assertAlmostEqual(entry.maintenance, 833.33, places=2)
                self.assertEqual(entry.utilities, 350.0)

    def test_empty_projection_breakdown(self):
        inputs = replace(BASELINE, config=replace(BASELINE_CONFIG, horizon_years=0))
        (entry,) = first_month_cost_breakdown([NamedScenario("Empty", inputs)])
        self.assertEqual(entry.bank, 0.0)
        self.assertEqual(entry.utilities, 0.0)


class TestInterestEarned(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.inputs = family_inputs()
        cls.plain = interest_earned_series(cls.inputs)

    def test_one_point_per_year(self):
        self.assertEqual(len(self.plain), 30)
        self.assertEqual([p.year for p in self.plain[:3]], [1, 2, 3])

    def test_family_interest_tracks_schedule(self):
        rows = build_schedule(config_for_variant(self.inputs, Variant.FAMILY)).rows
        self.assertAlmostEqual(self.plain[0].family_interest,
                               sum(r.family_interest for r in rows[:12]), delta=0.5)

    def test_bank_path_compounds_after_tax(self):
        r = 0.05 / 12 * (1 - 0.30)
        expected = 300_000 * ((1 + r) ** 12 - 1)
        self.assertAlmostEqual(self.plain[0].bank_interest, expected, delta=CENT)

    def test_reinvest_adds_earnings(self):
        with_reinvest = interest_earned_series(self.inputs, include_reinvest=True)
        self.assertEqual(with_reinvest[-1].bank_interest, self.plain[-1].bank_interest)
        self.assertGreater(with_reinvest[-1].family_interest, self.plain[-1].family_interest)

    def test_net_vs_bank(self):
        net = interest_earned_series(self.inputs, net_vs_bank=True)
        for plain, netted in zip(self.plain, net):
            with self.subTest(year=plain.year):
                self.assertAlmostEqual(netted.family_interest, plain.family_interest - plain.bank_interest,
                                       delta=CENT)

    def test_capped_at_thirty_years(self):
        self.assertEqual(len(interest_earned_series(family_inputs(horizon_years=40))), 30)

    def test_single_year_projection(self):
        inputs = family_inputs(horizon_years=1)
        self.assertEqual(len(interest_earned_series(inputs)), 1)


class TestPresets(unittest.TestCase):

    def test_baseline_inputs(self):
        self.assertEqual(BASELINE.down_bank_only, 150_000)
        self.assertEqual(BASELINE.down_with_family, 200_000)
        self.assertEqual(BASELINE_CONFIG.family.amount, 300_000)
        self.assertEqual([t.label for t in BASELINE_CONFIG.investment_tracks], ["Equities", "Bonds"])

    def test_baseline_projection(self):
        result = build_named_scenario(baseline_scenario())
        self.assertEqual(len(result.rows), 360)
        self.assertEqual(len(result.investment_tracks), 2)
        self.assertFalse(np.isnan(result.irr_annual))
        self.assertTrue(np.isfinite(result.npv))


if __name__ == '__main__':
    unittest.main()
