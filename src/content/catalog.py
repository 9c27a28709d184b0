"""Static post catalog.

Long-form guides shipped with the site. They are authored in Markdown,
enhanced once at import and never mutated afterwards; the CMS can
replace any of them by publishing a post with the same slug.
"""

from __future__ import annotations

from blogserve.content.enhancer import count_words, enhance
from blogserve.content.models import Post

_FIBONACCI_GUIDE = """
# Fibonacci Trading Strategy: The Complete Guide

Fibonacci levels have been a cornerstone of technical analysis for decades. This guide walks through the ratios, how to draw them and how to combine them with the rest of your trading plan.

## The Mathematical Foundation

The key ratios traders watch are derived from the relationships between numbers in the sequence:

- **23.6%** — a shallow pullback in a strong trend
- **38.2%** — the first serious support level
- **50.0%** — not a true Fibonacci ratio but widely watched
- **61.8%** — the *Golden Ratio*
- **78.6%** — the last line before a trend is considered broken

> Fibonacci levels work because enough traders watch them to make them self-fulfilling.

## Drawing Retracements Correctly

1. Identify a clear swing high and swing low
2. In an uptrend, draw from the swing low to the swing high
3. Use wicks, not candle bodies

## The Golden Pocket

The area between the 61.8% and 65% retracement is where institutional algorithms tend to execute. When price enters it with declining volume you have one of the highest-probability setups in trading.

For example, when Bitcoin pulled back from $73,000 to the golden pocket near $60,000 in 2024, buyers stepped in within days and the trend resumed.

Never trade a Fibonacci level without a stop-loss: a clean break of the 78.6% level can wipe out a month of gains.

## Key Takeaways

- Draw from wick to wick
- Watch the 61.8% to 65% zone
- Always define your risk

Read our guide to [smart money concepts](/blog/smart-money-concepts-trading) next.
"""

_RISK_MANAGEMENT = """
# Risk Management in Crypto Trading

Most traders fail not because their entries are bad but because one trade takes too much of their account. This guide covers position sizing, stop placement and the habits that keep an account alive.

## The 1% Rule

Risk no more than 1% of your account on any single trade. With a $10,000 account that means a maximum loss of $100 per trade, no matter how confident you feel.

## Position Sizing

Position size follows from the distance to your stop, not from how much you want to make:

- Decide where the trade idea is invalidated
- Measure the distance from entry to that level
- Divide your risk amount by that distance

## Stop-Loss Placement

Avoid placing your stop-loss at obvious round numbers, where liquidity hunts are most likely to take you out before the move.

Do not move your stop further away once a trade goes against you; that is how small losses become account-ending ones.

## Leverage

Imagine opening a 20x long on Ethereum the day before a surprise rate decision. A 5% move against you liquidates the whole position before you can react, and this scenario plays out every week.

## Summary

Risk management is a set of habits, not a single trick:

- Size positions from the stop distance
- Cap risk per trade
- Keep leverage low

See also the [Fibonacci guide](https://fibalgo.com/blog/fibonacci-trading-strategy-complete-guide).
"""

_SMART_MONEY = """
# Smart Money Concepts Explained

Smart money concepts describe how large participants leave footprints on the chart. Instead of classic patterns, traders look for liquidity, order blocks and imbalances.

## Liquidity

Liquidity pools sit above equal highs and below equal lows, where retail stop orders cluster. Large players need that liquidity to fill their size.

## Order Blocks

An order block is the last opposing candle before a strong displacement move. Price often returns to it before continuing.

## Fair Value Gaps

A fair value gap is a three-candle imbalance where the wicks of the first and third candles do not overlap. These gaps tend to get filled.

## Putting It Together

Let's say price sweeps the equal lows on the 4-hour chart, displaces upward and leaves a fair value gap inside a bullish order block. That confluence is the classic smart money long entry.

Combine this with the levels from our [Fibonacci strategy guide](/blog/fibonacci-trading-strategy-complete-guide) for additional confirmation.
"""

_RAW_POSTS: list[dict] = [
    {
        "slug": "fibonacci-trading-strategy-complete-guide",
        "title": "Fibonacci Trading Strategy: The Complete Guide",
        "description": (
            "Master Fibonacci retracements and extensions and learn how to find "
            "high-probability entries."
        ),
        "date": "2025-01-15",
        "author": "FibAlgo Team",
        "tags": ["fibonacci", "trading strategy", "technical analysis"],
        "read_time": "8 min read",
        "content": _FIBONACCI_GUIDE,
    },
    {
        "slug": "risk-management-crypto-trading",
        "title": "Risk Management in Crypto Trading",
        "description": "Position sizing, stop placement and leverage rules that keep an account alive.",
        "date": "2025-01-22",
        "author": "FibAlgo Team",
        "tags": ["risk management", "crypto trading", "trading strategy"],
        "read_time": "7 min read",
        "content": _RISK_MANAGEMENT,
    },
    {
        "slug": "smart-money-concepts-trading",
        "title": "Smart Money Concepts Explained",
        "description": "Liquidity, order blocks and fair value gaps in plain language.",
        "date": "2025-01-18",
        "author": "FibAlgo Team",
        "tags": ["smart money", "technical analysis", "crypto trading"],
        "read_time": "6 min read",
        "content": _SMART_MONEY,
    },
]


def _build(raw: dict) -> Post:
    content = enhance(raw["content"])
    word_count = raw.get("word_count") or count_words(content)
    return Post(
        **{**raw, "content": content, "tags": tuple(raw.get("tags", ())), "word_count": word_count}
    )


STATIC_POSTS: tuple[Post, ...] = tuple(_build(raw) for raw in _RAW_POSTS)
