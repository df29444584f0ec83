#!/usr/bin/env python3
"""Quick verification script to check if milestonecheck is set up correctly."""

import os
import sys


def check_imports():
    """Check if all imports work."""
    print("Checking imports...")
    try:
        from milestonecheck.evaluator import is_milestone_due_today  # noqa: F401
        from milestonecheck.github import BasicAuthFilter, GitHubClient  # noqa: F401
        from milestonecheck.trace import JsonlTraceStore  # noqa: F401

        print("✓ All imports successful")
        return True
    except ImportError as e:
        print(f"✗ Import error: {e}")
        print("  Run: pip install -e .")
        return False


def check_token():
    """Report whether a GitHub token is available."""
    print("\nChecking GitHub token...")
    if os.getenv("GITHUB_TOKEN"):
        print("✓ GITHUB_TOKEN is set")
    else:
        print("⚠ GITHUB_TOKEN not set (anonymous access, public repositories only)")
    return True


def main():
    """Run all checks."""
    print("=" * 50)
    print("milestonecheck Setup Verification")
    print("=" * 50)

    all_ok = check_imports()
    all_ok &= check_token()

    print("\n" + "=" * 50)
    if all_ok:
        print("✓ Setup looks good! You can run:")
        print("  milestonecheck check --repo owner/name --version 1.0.0")
    else:
        print("✗ Some issues found. Please fix them above.")
        sys.exit(1)
    print("=" * 50)


if __name__ == "__main__":
    main()
