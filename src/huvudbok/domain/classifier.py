"""BAS account classification.

Class is decided by the first digit of the account number and the finer
type by the first two digits. The functions here are total: anything that
is not a recognised BAS number lands in the ``OTHER`` bucket.
"""

from huvudbok.domain.entities import AccountClass, AccountClassification, AccountType

# (first two digits low, high, type), inclusive
_TYPE_RANGES: tuple[tuple[str, str, AccountType], ...] = (
    ("10", "13", AccountType.FIXED_ASSET),
    ("14", "17", AccountType.CURRENT_ASSET),
    ("18", "19", AccountType.CASH_AND_PLACEMENTS),
    ("20", "21", AccountType.EQUITY),
    ("22", "24", AccountType.LONG_TERM_LIABILITY),
    ("25", "29", AccountType.SHORT_TERM_LIABILITY),
    ("30", "37", AccountType.SALES_REVENUE),
    ("38", "39", AccountType.OTHER_OPERATING_REVENUE),
    ("40", "49", AccountType.GOODS_AND_MATERIALS),
    ("50", "69", AccountType.OTHER_EXTERNAL_COSTS),
    ("70", "76", AccountType.PERSONNEL_COSTS),
    ("77", "79", AccountType.DEPRECIATION),
    ("80", "89", AccountType.FINANCIAL_ITEMS),
)

ACCOUNT_CLASS_LABELS: dict[AccountClass, str] = {
    AccountClass.ASSET: "Tillgång",
    AccountClass.LIABILITY: "Skuld",
    AccountClass.EQUITY: "Eget kapital",
    AccountClass.REVENUE: "Intäkt",
    AccountClass.EXPENSE: "Kostnad",
    AccountClass.OTHER: "Övriga",
}

ACCOUNT_TYPE_LABELS: dict[AccountType, str] = {
    AccountType.FIXED_ASSET: "Anläggningstillgångar",
    AccountType.CURRENT_ASSET: "Omsättningstillgångar",
    AccountType.CASH_AND_PLACEMENTS: "Kortfristiga placeringar, kassa och bank",
    AccountType.EQUITY: "Eget kapital",
    AccountType.LONG_TERM_LIABILITY: "Långfristiga skulder",
    AccountType.SHORT_TERM_LIABILITY: "Kortfristiga skulder",
    AccountType.SALES_REVENUE: "Försäljningsintäkter",
    AccountType.OTHER_OPERATING_REVENUE: "Övriga rörelseintäkter",
    AccountType.GOODS_AND_MATERIALS: "Varuinköp",
    AccountType.OTHER_EXTERNAL_COSTS: "Övriga externa kostnader",
    AccountType.PERSONNEL_COSTS: "Personalkostnader",
    AccountType.DEPRECIATION: "Av- och nedskrivningar",
    AccountType.FINANCIAL_ITEMS: "Finansiella poster",
    AccountType.OTHER: "Övriga",
}


def is_bas_number(account_number: str) -> bool:
    """Return True for a bookable four-digit account number in classes 1-8."""
    return (
        isinstance(account_number, str)
        and len(account_number) == 4
        and account_number.isdigit()
        and "1" <= account_number[0] <= "8"
    )


def classify_class(account_number: str) -> AccountClass:
    """Return the account class for an account number."""
    first = account_number[:1]
    if first == "1":
        return AccountClass.ASSET
    if first == "2":
        if "20" <= account_number[:2] <= "21":
            return AccountClass.EQUITY
        return AccountClass.LIABILITY
    if first == "3":
        return AccountClass.REVENUE
    if first in ("4", "5", "6", "7", "8"):
        return AccountClass.EXPENSE
    return AccountClass.OTHER


def classify_type(account_number: str) -> AccountType:
    """Return the finer account type for an account number."""
    prefix = account_number[:2]
    if len(prefix) == 2 and prefix.isdigit():
        for low, high, account_type in _TYPE_RANGES:
            if low <= prefix <= high:
                return account_type
    return AccountType.OTHER


def classify(account_number: str) -> AccountClassification:
    """Classify a BAS account number.

    Malformed input is not rejected; it falls into the "Övriga" bucket.
    """
    if not isinstance(account_number, str):
        account_number = str(account_number)
    return AccountClassification(
        account_class=classify_class(account_number),
        account_type=classify_type(account_number),
    )


def is_debit_normal(account_number: str) -> bool:
    """Return True for accounts that increase on debit (assets and expenses)."""
    return classify_class(account_number) in (AccountClass.ASSET, AccountClass.EXPENSE)


def is_balance_account(account_number: str) -> bool:
    """Return True for balance-sheet accounts (classes 1 and 2)."""
    return account_number[:1] in ("1", "2")


def account_class_label(account_class: AccountClass) -> str:
    """Swedish display label for an account class."""
    return ACCOUNT_CLASS_LABELS[account_class]


def account_type_label(account_type: AccountType) -> str:
    """Swedish display label for an account type."""
    return ACCOUNT_TYPE_LABELS[account_type]
