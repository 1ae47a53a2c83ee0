"""Per-variant cashback rate tables.

Every card variant maps a subset of categories to a rate and names one
fallback rule for everything else. The pooled variant (S Rewards) only pays
its headline rate once a batch-wide spend threshold is reached; until then
its ``locked`` rule applies.
"""

from dataclasses import dataclass, field

from cardwise.domain.models import Card, CardVariant, Category


@dataclass(frozen=True, slots=True)
class RateRule:
    rate: float
    label: str


@dataclass(frozen=True, slots=True)
class RatePolicy:
    fallback: RateRule
    rules: dict[Category, RateRule] = field(default_factory=dict)
    pooled: bool = False
    locked: RateRule | None = None

    def rule_for(self, category: Category, pooled_unlocked: bool = True) -> RateRule:
        if self.pooled and not pooled_unlocked and self.locked is not None:
            return self.locked
        return self.rules.get(category, self.fallback)


def _same_rate(categories: list[Category], rule: RateRule) -> dict[Category, RateRule]:
    return {category: rule for category in categories}


_SHOPEE_BILLS = [Category.ELECTRICITY, Category.WATER, Category.INTERNET, Category.PHONE]

POLICIES: dict[CardVariant, RatePolicy] = {
    CardVariant.SHOPEE_PLATINUM: RatePolicy(
        rules={
            Category.SHOPEE: RateRule(0.10, "10% on Shopee spend"),
            **_same_rate(_SHOPEE_BILLS, RateRule(0.10, "10% on bills paid through ShopeePay")),
        },
        fallback=RateRule(0.001, "0.1% on other spend"),
    ),
    CardVariant.MSB_ONLINE: RatePolicy(
        rules=_same_rate(
            [Category.SHOPEE, Category.ONLINE], RateRule(0.10, "10% on Online/Shopee spend")
        ),
        fallback=RateRule(0.001, "0.1% on other spend"),
    ),
    CardVariant.TCB_EVERYDAY: RatePolicy(
        rules={
            **_same_rate(
                [Category.SHOPEE, Category.SUPERMARKET],
                RateRule(0.05, "5% on Supermarket/Shopee spend"),
            ),
            Category.MARKET: RateRule(0.005, "0.5% on market spend (no supermarket MCC)"),
        },
        fallback=RateRule(0.005, "0.5% base rate"),
    ),
    CardVariant.S_REWARDS: RatePolicy(
        fallback=RateRule(0.12, "12% once pooled spend reaches the minimum"),
        pooled=True,
        locked=RateRule(0.001, "0.1% until pooled spend reaches the minimum"),
    ),
    CardVariant.CASH: RatePolicy(
        fallback=RateRule(0.0, "cash payments earn no cashback"),
    ),
    CardVariant.GENERIC: RatePolicy(
        fallback=RateRule(0.005, "0.5% base points"),
    ),
}


def policy_for(card: Card) -> RatePolicy:
    return POLICIES[card.variant]


def resolve_rate(card: Card, category: Category, pooled_unlocked: bool = True) -> RateRule:
    return policy_for(card).rule_for(category, pooled_unlocked)
