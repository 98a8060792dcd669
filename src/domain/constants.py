"""Domain constants for reconciliation and projection.

Labels and field names are kept in the language of the source data.
"""

from decimal import Decimal

BASE_CURRENCY = "TWD"

# Import record columns (expense-tracker CSV export).
FIELD_DATE = "日期"
FIELD_TIME = "時間"
FIELD_NAME = "名稱"
FIELD_AMOUNT = "金額"
FIELD_CURRENCY = "幣種"
FIELD_CATEGORY = "主類別"
FIELD_SUBCATEGORY = "子類別"
FIELD_BALANCE = "餘額"
FIELD_ACCOUNT = "帳戶"
FIELD_RECORD_TYPE = "記錄類型"
FIELD_FEE = "手續費"
FIELD_DISCOUNT = "折扣"
FIELD_MERCHANT = "商家"
FIELD_PROJECT = "專案"
FIELD_DESCRIPTION = "描述"
FIELD_TAG = "標籤"
FIELD_COUNTERPARTY = "對象"

TRANSACTION_ID_FIELDS = (
    FIELD_DATE,
    FIELD_TIME,
    FIELD_NAME,
    FIELD_AMOUNT,
    FIELD_CURRENCY,
    FIELD_CATEGORY,
    FIELD_SUBCATEGORY,
    FIELD_BALANCE,
)
TRANSACTION_ID_LENGTH = 12

# Record types, in both languages of the export.
TRANSFER_TYPES = ("轉帳", "Transfer")
TRANSFER_CATEGORY = "轉帳"
CREDIT_CARD_CATEGORY = "信用卡"
RECEIVABLE_TYPES = ("應收款項", "Receivable")
REFUND_TYPES = ("退款", "Refund")
INCOME_TYPES = ("收入", "Income")
EXCHANGE_SUBCATEGORY = "兌換"

# Manual actions recorded against persisted transactions.
ACTION_CLOSE = "結案"
ACTION_IGNORE = "無視"
ACTION_EXPENSE = "當作支出"
ACTION_EXCLUDE = "排除"
ACTION_OPTIONS = "結案 / 無視 / 當作支出 / 排除"
ACTION_DESCRIPTION = "結案:確認盈虧 | 無視:不處理 | 支出:強制計費 | 排除:剔除此筆"

# Classification rules.
TAG_PATTERN = r"#R(\d+)"
PROJECT_KEYWORD_GROUPS = (
    (("shopping", "購物"), "R37", "Shopping"),
    (("food", "吃喝"), "R35", "Food"),
    (("transport", "交通"), "R36", "Transport"),
    (("entertainment", "娛樂"), "R38", "Entertainment"),
)
GLOBAL_TRAVEL_CATEGORY = "GlobalTravel"
TECH_FEE_KEYWORD = "技師牌費"
TECH_FEE_INCOME_MONTH = 7
TECH_FEE_INCOME_THRESHOLD = Decimal("400000")
TECH_FEE_INCOME_NAME = "Technician Fee Income"
UNMATCHED_NAME = "Waiting_Rules"
UNMATCHED_LEDGER_ID = "UNMATCHED"
NON_RECURRING_INCOME_PREFIX = "非固定收入"
DEFAULT_INCOME_SUBCATEGORY = "Other"

STATUS_TECH_FEE_INCOME = "Tech Fee (Income)"
STATUS_TECH_FEE_IGNORED = "Tech Fee (Amortized) - Ignored"
STATUS_TRANSFER_IGNORED = "Transfer - Ignored"
STATUS_RECEIVABLE_PENDING = (
    "Receivable: Check Status (Actions: 結案, 無視, 當作支出)"
)
STATUS_UNMATCHED = "Waiting_Rules"

# Receivable netting.
SYNTHETIC_MANUAL_EXPENSE_ID = "R_MANUAL_EXP"
SYNTHETIC_PROFIT_ID = "R_REC_PROFIT"
SYNTHETIC_LOSS_ID = "R_REC_LOSS"
UNKNOWN_COUNTERPARTY = "Unknown"

# Ledger.
LEDGER_NOTE_MAX_LENGTH = 500
LEDGER_NOTE_SEPARATOR = "; "

# Projection.
PROJECTION_MONTHS = 12
INCOME_TYPE = "Income"
EXPENSE_TYPE = "Expense"
HOUSE_CATEGORY = "House"
SAVINGS_CATEGORIES = ("Savings", "Invest", "Startups")
SAVINGS_NAME_KEYWORDS = ("儲蓄", "存錢")
INSURANCE_COMPONENT_POLICY = "R09"
INSURANCE_COST_POLICY = "R10"
INSURANCE_POLICY_IDS = (INSURANCE_COMPONENT_POLICY, INSURANCE_COST_POLICY)
INSURANCE_POLICY_CURRENCIES = {
    INSURANCE_COMPONENT_POLICY: "USD",
    INSURANCE_COST_POLICY: BASE_CURRENCY,
}

# Persisted tables.
TABLE_TRANSACTIONS = "Raw_Transactions"
TABLE_LEDGER = "Expense_History"
TABLE_RECURRING = "Recurring_Items"
TABLE_ONE_OFF = "One_Off_Events"
TABLE_INSURANCE = "Insurance_Details"
TABLE_ASSETS = "Assets_Inventory"


__all__ = [name for name in dir() if name.isupper()]
