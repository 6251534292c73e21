#!/usr/bin/env python
"""
Build pipeline - validates the seed catalog and runs golden tests.

Usage:
    python scripts/build_all.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from wholesale_store.data.load_catalog import build_catalog


def main():
    print("=" * 60)
    print("WHOLESALE STORE BUILD PIPELINE")
    print("=" * 60)
    print()
    
    print("[1/2] Validating seed catalog...")
    _, report = build_catalog(verbose=True)
    
    if report["status"] != "success":
        print("\n❌ BUILD FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)
    
    print()
    print("[2/2] Running golden tests...")
    
    import subprocess
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/test_golden_cases.py', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )
    
    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)
    
    print()
    print("=" * 60)
    print("✅ BUILD COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    print(f"  Products: {report['metrics']['product_count']}")
    print(f"  Out of stock: {report['metrics']['out_of_stock']}")
    print(f"  Customers: {report['metrics']['customer_count']}")
    print(f"  Rules: {report['metrics']['active_rules']} active of {report['metrics']['rule_count']}")
    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")


if __name__ == "__main__":
    main()
