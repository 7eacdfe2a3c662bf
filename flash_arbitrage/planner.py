"""
Instruction plan generation for profitable cycles.
"""

from typing import Optional

from .exceptions import InvalidResult
from .types import ArbitrageResult, InstructionPlan, PlanStep


def validate_result(result: ArbitrageResult) -> None:
    """
    Check an ArbitrageResult is internally consistent.

    Raises:
        InvalidResult: If the cycle does not return to the borrow token, or
            profit / profitable disagree with the amounts
    """
    if not result.final.same_token(result.borrowed):
        raise InvalidResult(
            f"Cycle ends in {result.final.token.symbol}, "
            f"borrowed {result.borrowed.token.symbol}",
            details={"final": result.final.token, "borrowed": result.borrowed.token},
        )
    expected_profit = result.final - result.borrowed
    if result.profit != expected_profit:
        raise InvalidResult(
            f"Profit {result.profit} does not match final - borrowed = {expected_profit}",
            details={"profit": result.profit, "expected": expected_profit},
        )
    if result.profitable != (result.profit > 0):
        raise InvalidResult(
            f"profitable={result.profitable} contradicts profit {result.profit}"
        )


def generate_plan(result: ArbitrageResult) -> Optional[InstructionPlan]:
    """
    Turn a profitable result into the ordered steps an operator follows.

    Returns None when the cycle is not profitable. Pure function, no I/O.

    Raises:
        InvalidResult: If a result marked profitable is malformed
    """
    if not result.profitable:
        return None

    validate_result(result)

    steps = (
        PlanStep(
            index=1,
            action="flash_loan",
            venue=result.flash_loan_venue,
            input=result.borrowed,
            output=result.borrowed,
        ),
        PlanStep(
            index=2,
            action="swap",
            venue=result.venue_a,
            input=result.borrowed,
            output=result.intermediate,
        ),
        PlanStep(
            index=3,
            action="swap",
            venue=result.venue_b,
            input=result.intermediate,
            output=result.final,
        ),
    )
    return InstructionPlan(steps=steps, profit=result.profit, borrow_token=result.borrow_token)
