"""
Console and JSON rendering of arbitrage results.

This is a thin layer over ArbitrageResult / InstructionPlan; amounts stay
integers until they are formatted here.
"""

import re
from typing import Any, Dict, List, Optional

from .types import Amount, ArbitrageResult, InstructionPlan, PlanStep
from .utils import calculate_bps, format_signed_units, format_units

# Display names for the combo builder's cubes
VENUE_LABELS = {
    "balancer_v2": "Balancer V2",
    "uniswap_v2": "Uniswap V2",
    "uniswap_v3": "Uniswap V3",
}


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"

    @staticmethod
    def strip(text: str) -> str:
        """Remove all ANSI codes from text."""
        return re.sub(r"\033\[[0-9;]+m", "", text)


def format_amount(amount: Amount) -> str:
    return f"{format_units(amount.value, amount.token.decimals)} {amount.token.symbol}"


def venue_label(step: PlanStep) -> str:
    label = VENUE_LABELS.get(step.venue.kind, step.venue.kind)
    return f"{step.venue.name} ({label})"


def render_result(result: ArbitrageResult) -> List[str]:
    """Lines describing the three quoted legs and the profit."""
    token = result.borrow_token
    lines = [
        f"Flash Loan: Borrowed {format_amount(result.borrowed)} "
        f"on {result.flash_loan_venue.name}",
        f"Swap 1: {format_amount(result.borrowed)} -> "
        f"{format_amount(result.intermediate)} on {result.venue_a.name}",
        f"Swap 2: {format_amount(result.intermediate)} -> "
        f"{format_amount(result.final)} on {result.venue_b.name}",
    ]
    bps = calculate_bps(result.profit, result.borrowed.value)
    profit_line = (
        f"Profit: {format_signed_units(result.profit, token.decimals)} {token.symbol} "
        f"({bps:+.2f} bps)"
    )
    if result.profitable:
        lines.append(f"💰 {profit_line}")
    else:
        lines.append(f"❌ {profit_line}")
        lines.append("No profit detected.")
    return lines


def render_plan(plan: InstructionPlan) -> List[str]:
    """Step-by-step instructions for building the combo by hand."""
    flash, swap_a, swap_b = plan.steps
    lines = [
        "",
        "=== Combo Setup Instructions ===",
        f'{flash.index}. Add a "Flash Loan" cube from {venue_label(flash)}:',
        f"   - Borrow Amount: {format_amount(flash.output)}",
        f'{swap_a.index}. Add a "Swap" cube from {venue_label(swap_a)}:',
        f"   - Input: {format_amount(swap_a.input)} (connect from Flash Loan output)",
        f"   - Output: {format_amount(swap_a.output)}",
        f'{swap_b.index}. Add a "Swap" cube from {venue_label(swap_b)}:',
        f"   - Input: {format_amount(swap_b.input)} (connect from {swap_a.venue.name} output)",
        f"   - Output: {format_amount(swap_b.output)} "
        f"(ensure > {format_amount(flash.output)} for profit)",
        f"{len(plan) + 1}. Review and execute the combo.",
        "Note: Ensure sufficient liquidity and check gas costs.",
    ]
    return lines


def render_report(
    result: ArbitrageResult, plan: Optional[InstructionPlan] = None, color: bool = False
) -> str:
    """Full human-readable report for one evaluation."""
    lines = render_result(result)
    if plan is not None:
        lines.extend(render_plan(plan))
    text = "\n".join(lines)
    if not color:
        return text

    highlight = Colors.GREEN if result.profitable else Colors.RED
    return "\n".join(
        f"{highlight}{Colors.BOLD}{line}{Colors.RESET}" if "Profit:" in line else line
        for line in text.splitlines()
    )


def amount_to_dict(amount: Amount) -> Dict[str, Any]:
    return {
        "token": amount.token.symbol,
        "address": amount.token.address,
        "value": str(amount.value),
        "formatted": format_units(amount.value, amount.token.decimals),
    }


def result_to_dict(
    result: ArbitrageResult, plan: Optional[InstructionPlan] = None
) -> Dict[str, Any]:
    """JSON-friendly structure; integer values are strings to survive JSON readers."""
    token = result.borrow_token
    data = {
        "borrowed": amount_to_dict(result.borrowed),
        "intermediate": amount_to_dict(result.intermediate),
        "final": amount_to_dict(result.final),
        "profit": {
            "token": token.symbol,
            "value": str(result.profit),
            "formatted": format_signed_units(result.profit, token.decimals),
        },
        "profitable": result.profitable,
        "venues": {
            "flash_loan": result.flash_loan_venue.name,
            "swap_a": result.venue_a.name,
            "swap_b": result.venue_b.name,
        },
        "plan": None,
    }
    if plan is not None:
        data["plan"] = [
            {
                "step": step.index,
                "action": step.action,
                "venue": step.venue.name,
                "venue_address": step.venue.address,
                "input": amount_to_dict(step.input),
                "output": amount_to_dict(step.output),
            }
            for step in plan.steps
        ]
    return data
