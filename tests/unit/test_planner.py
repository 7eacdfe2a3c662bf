"""
Unit tests for flash_arbitrage/planner.py
"""

import dataclasses
import unittest

from cycle_fixtures import BALANCER, SUSHI, UNI_V3, USDC, WETH, WETH_0_04
from flash_arbitrage.exceptions import InvalidResult
from flash_arbitrage.planner import generate_plan, validate_result
from flash_arbitrage.types import Amount, ArbitrageResult


def make_result(final_value: int, borrowed_value: int = 100_000000) -> ArbitrageResult:
    profit = final_value - borrowed_value
    return ArbitrageResult(
        borrowed=Amount(USDC, borrowed_value),
        intermediate=Amount(WETH, WETH_0_04),
        final=Amount(USDC, final_value),
        profit=profit,
        profitable=profit > 0,
        flash_loan_venue=BALANCER,
        venue_a=SUSHI,
        venue_b=UNI_V3,
    )


class TestGeneratePlan(unittest.TestCase):
    """Plan generation for profitable and unprofitable results."""

    def test_profitable_result_yields_three_steps(self):
        result = make_result(104_000000)
        plan = generate_plan(result)

        self.assertIsNotNone(plan)
        self.assertEqual(len(plan), 3)
        self.assertEqual(plan.profit, 4_000000)
        self.assertEqual(plan.borrow_token, USDC)

        flash, swap_a, swap_b = plan.steps
        self.assertEqual([s.index for s in plan], [1, 2, 3])
        self.assertEqual(flash.action, "flash_loan")
        self.assertEqual(flash.venue, BALANCER)
        self.assertEqual(flash.input, result.borrowed)
        self.assertEqual(flash.output, result.borrowed)

        self.assertEqual(swap_a.action, "swap")
        self.assertEqual(swap_a.venue, SUSHI)
        self.assertEqual(swap_a.input, result.borrowed)
        self.assertEqual(swap_a.output, result.intermediate)

        self.assertEqual(swap_b.action, "swap")
        self.assertEqual(swap_b.venue, UNI_V3)
        self.assertEqual(swap_b.input, result.intermediate)
        self.assertEqual(swap_b.output, result.final)

    def test_steps_chain_outputs_to_inputs(self):
        plan = generate_plan(make_result(100_000001))
        steps = plan.steps
        for previous, current in zip(steps, steps[1:]):
            self.assertEqual(previous.output, current.input)

    def test_unprofitable_result_yields_no_plan(self):
        self.assertIsNone(generate_plan(make_result(99_000000)))

    def test_break_even_yields_no_plan(self):
        self.assertIsNone(generate_plan(make_result(100_000000)))

    def test_plan_is_pure(self):
        result = make_result(104_000000)
        self.assertEqual(generate_plan(result), generate_plan(result))


class TestValidateResult(unittest.TestCase):
    """Malformed results are rejected instead of planned."""

    def test_consistent_result_passes(self):
        validate_result(make_result(104_000000))
        validate_result(make_result(90_000000))

    def test_profit_mismatch(self):
        result = dataclasses.replace(make_result(104_000000), profit=5_000000)
        with self.assertRaises(InvalidResult):
            generate_plan(result)

    def test_profitable_flag_contradicts_profit(self):
        result = dataclasses.replace(make_result(99_000000), profitable=True)
        with self.assertRaises(InvalidResult):
            generate_plan(result)

    def test_cycle_must_return_to_borrow_token(self):
        result = dataclasses.replace(
            make_result(104_000000), final=Amount(WETH, 104_000000)
        )
        with self.assertRaises(InvalidResult) as ctx:
            generate_plan(result)
        self.assertIn("Cycle ends in WETH", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
