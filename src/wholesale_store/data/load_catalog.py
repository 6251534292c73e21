"""
Catalog Loader - Reads the seed CSV files into an in-memory catalog store.

Produces a build report (status, input files, metrics, warnings, errors)
alongside the store so bad seed data is reported instead of half-loaded.
"""
import hashlib
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.errors import CatalogStoreError
from ..engine.models import CustomerType
from .catalog_store import InMemoryCatalogStore

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = ['id', 'name', 'description', 'stock', 'base_price']
CUSTOMER_COLUMNS = ['id', 'name', 'email', 'customer_type']
RULE_COLUMNS = ['id', 'customer_type', 'discount_percentage', 'minimum_order_amount', 'is_active', 'description']


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def parse_bool(value: str) -> bool:
    """Parse a boolean from CSV string."""
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


def _parse_decimal(value: str) -> Optional[Decimal]:
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def _read_table(path: Path, columns: list[str], name: str, report: dict) -> Optional[pd.DataFrame]:
    """Read one seed CSV as strings, strip cells and check the header."""
    if not path.exists():
        report["errors"].append(f"{name} file not found at {path}")
        return None

    report["input_files"][name] = {"path": str(path), "hash": get_file_hash(path)}

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    missing = [c for c in columns if c not in df.columns]
    if missing:
        report["errors"].append(f"{name} is missing columns: {', '.join(missing)}")
        return None

    bad_ids = df[~df['id'].str.fullmatch(r'\d+')]
    if not bad_ids.empty:
        report["errors"].append(f"{name} has non-integer ids: {bad_ids['id'].tolist()}")
        return None

    df['id'] = df['id'].astype(int)
    duplicates = df['id'].duplicated().sum()
    if duplicates > 0:
        report["errors"].append(f"{name} has {duplicates} duplicate ids")

    return df[columns].set_index('id')


def _check_products(products: pd.DataFrame, report: dict) -> pd.DataFrame:
    for pid, row in products.iterrows():
        if not row['name']:
            report["errors"].append(f"Product {pid} has no name")
        if not row['stock'].lstrip('-').isdigit() or int(row['stock']) < 0:
            report["errors"].append(f"Product {pid} has invalid stock '{row['stock']}'")
        price = _parse_decimal(row['base_price'])
        if price is None or price < 0:
            report["errors"].append(f"Product {pid} has invalid base price '{row['base_price']}'")

    if report["errors"]:
        return products

    products = products.copy()
    products['stock'] = products['stock'].astype(int)
    out_of_stock = int((products['stock'] == 0).sum())
    report["metrics"]["product_count"] = len(products)
    report["metrics"]["out_of_stock"] = out_of_stock
    if out_of_stock > 0:
        report["warnings"].append(f"{out_of_stock} products are out of stock")
    return products


def _check_customers(customers: pd.DataFrame, report: dict):
    allowed = {t.value.lower() for t in CustomerType}
    for cid, row in customers.iterrows():
        if not row['name']:
            report["errors"].append(f"Customer {cid} has no name")
        if '@' not in row['email']:
            report["errors"].append(f"Customer {cid} has invalid email '{row['email']}'")
        if row['customer_type'].lower() not in allowed:
            report["errors"].append(f"Customer {cid} has unknown type '{row['customer_type']}'")

    duplicate_emails = customers['email'].str.lower().duplicated().sum()
    if duplicate_emails > 0:
        report["errors"].append(f"{duplicate_emails} customers share an email address")
    report["metrics"]["customer_count"] = len(customers)


def _check_rules(rules: pd.DataFrame, report: dict) -> pd.DataFrame:
    allowed = {t.value.lower() for t in CustomerType}
    for rid, row in rules.iterrows():
        if row['customer_type'].lower() not in allowed:
            report["errors"].append(f"Rule {rid} has unknown customer type '{row['customer_type']}'")
        pct = _parse_decimal(row['discount_percentage'])
        if pct is None or pct < 0 or pct > 100:
            report["errors"].append(f"Rule {rid} discount must be between 0 and 100, got '{row['discount_percentage']}'")
        if row['minimum_order_amount']:
            minimum = _parse_decimal(row['minimum_order_amount'])
            if minimum is None or minimum < 0:
                report["errors"].append(f"Rule {rid} has invalid minimum order amount '{row['minimum_order_amount']}'")

    rules = rules.copy()
    rules['is_active'] = rules['is_active'].map(parse_bool).astype(bool)
    # Stored with canonical casing so type filters match exactly
    canonical = {t.value.lower(): t.value for t in CustomerType}
    rules['customer_type'] = rules['customer_type'].str.lower().map(canonical).fillna(rules['customer_type'])

    active = int(rules['is_active'].sum())
    report["metrics"]["rule_count"] = len(rules)
    report["metrics"]["active_rules"] = active
    if not rules[rules['is_active'] & (rules['customer_type'] == CustomerType.WHOLESALE.value)].shape[0]:
        report["warnings"].append("No active wholesale pricing rules; wholesale customers pay base price")
    return rules


def build_catalog(settings: Optional[Settings] = None, verbose: bool = False) -> tuple[Optional[InMemoryCatalogStore], dict]:
    """
    Load and validate the seed catalog.

    Args:
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        (store or None when validation failed, build report dictionary)
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "input_files": {},
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    products = _read_table(settings.products_csv, PRODUCT_COLUMNS, "products", report)
    customers = _read_table(settings.customers_csv, CUSTOMER_COLUMNS, "customers", report)
    rules = _read_table(settings.pricing_rules_csv, RULE_COLUMNS, "pricing_rules", report)

    if products is not None:
        products = _check_products(products, report)
    if customers is not None:
        _check_customers(customers, report)
        canonical = {t.value.lower(): t.value for t in CustomerType}
        customers['customer_type'] = customers['customer_type'].str.lower().map(canonical).fillna(customers['customer_type'])
    if rules is not None:
        rules = _check_rules(rules, report)

    if report["errors"]:
        report["status"] = "failed"
        for msg in report["errors"]:
            logger.error("Catalog load error: %s", msg)
            if verbose:
                print(f"ERROR: {msg}")
        return None, report

    for msg in report["warnings"]:
        logger.warning("Catalog load warning: %s", msg)
        if verbose:
            print(f"WARNING: {msg}")

    report["status"] = "success"
    if verbose:
        print(
            f"Catalog loaded: {report['metrics']['product_count']} products, "
            f"{report['metrics']['customer_count']} customers, "
            f"{report['metrics']['rule_count']} rules."
        )

    return InMemoryCatalogStore(products, customers, rules), report


def load_catalog_store(settings: Optional[Settings] = None) -> InMemoryCatalogStore:
    """Build the catalog store or raise CatalogStoreError listing what was wrong."""
    store, report = build_catalog(settings)
    if store is None:
        raise CatalogStoreError("Seed catalog failed validation: " + "; ".join(report["errors"]))
    return store


if __name__ == "__main__":
    build_catalog(verbose=True)
