#!/usr/bin/env python3
"""Schema configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from calendardate.config.loader import ConfigLoader
from calendardate.config.validation import ConfigValidator, SchemaIssue


def validate_schema(loader: ConfigLoader, name: str) -> List[SchemaIssue]:
    """Validate the merged definition of a named schema."""
    definition = loader.merge_definition(name)
    return ConfigValidator.validate_schema_definition(definition)


def main(config_dir: Optional[str] = None) -> int:
    """Main validation function."""
    loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
    schemas_file = loader.config_dir / "schemas.yaml"
    print(f"🔍 Validating schemas in {schemas_file}...")

    names = sorted(loader.load_schema_definitions())
    if not names:
        print("⚠️ No schemas defined")
        return 0

    all_valid = True

    for name in names:
        issues = validate_schema(loader, name)

        if issues:
            print(f"❌ {name}: {len(issues)} issue(s)")
            for issue in issues:
                print(f"  • {issue.field}: {issue.message} (value: {issue.value})")
            all_valid = False
            continue

        schema = loader.build_schema(name)
        print(f"✅ {name}: {schema!r}")

    if all_valid:
        print("\n🎉 All schemas are valid!")
        return 0

    print("\n❌ Schema validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
