import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Paths
TEMPLATE_DIR = BASE_DIR / "templates"

# Application settings
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "Rs.")
COMPANY_NAME = os.getenv("COMPANY_NAME", "Smart Salary Calculator")

# Secret for Flask flash messages
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

# Statutory contributions, computed on basic salary only
EPF_EMPLOYEE_RATE = Decimal('0.08')
EPF_EMPLOYER_RATE = Decimal('0.12')
ETF_EMPLOYER_RATE = Decimal('0.03')

# Monthly income tax brackets: (lower, upper, rate). None means no upper bound.
TAX_BRACKETS = [
    (Decimal('0'), Decimal('150000'), Decimal('0.00')),
    (Decimal('150000'), Decimal('233333'), Decimal('0.06')),
    (Decimal('233333'), Decimal('275000'), Decimal('0.18')),
    (Decimal('275000'), Decimal('316667'), Decimal('0.24')),
    (Decimal('316667'), Decimal('358333'), Decimal('0.30')),
    (Decimal('358333'), None, Decimal('0.36')),
]
