"""
Export and Import of the dish catalog, weekly plan and pantry as one JSON bundle.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from weekmenu.infra.Dish_Repository import parse_dishes
from weekmenu.infra.Pantry_Repository import parse_pantry
from weekmenu.infra.Plan_Repository import parse_plan
from weekmenu.infra.storage import SnapshotStore, load_quietly, save_quietly
from weekmenu.utilities.constants import DISHES_STORAGE_KEY, PLAN_STORAGE_KEY, PANTRY_STORAGE_KEY

logger = logging.getLogger(__name__)

BUNDLE_VERSION = "1.0"


class DataExporter:
    """Export planner data from a snapshot store."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    def build_bundle(self) -> dict:
        return {
            'version': BUNDLE_VERSION,
            'export_date': datetime.now().isoformat(),
            'dishes': [d.to_dict() for d in parse_dishes(load_quietly(self.store, DISHES_STORAGE_KEY))],
            'plan': parse_plan(load_quietly(self.store, PLAN_STORAGE_KEY)),
            'pantry': parse_pantry(load_quietly(self.store, PANTRY_STORAGE_KEY)),
        }

    def export_all(self, output_path: Optional[Path] = None) -> Optional[Path]:
        """Write all three stores to a single JSON file."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"weekly_menu_export_{timestamp}.json")

        try:
            bundle = self.build_bundle()
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(bundle, f, indent=2, ensure_ascii=False)
            logger.info(f"Exported {len(bundle['dishes'])} dishes to {output_path}")
            return Path(output_path)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            return None


class DataImporter:
    """Import a bundle written by DataExporter into a snapshot store."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    def import_bundle(self, input_path: Path) -> bool:
        """
        Replace the stored dishes, plan and pantry with the bundle's contents.

        Each section is parsed the same way as at startup, so a malformed section
        is stored as that store's empty default.
        """
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                bundle = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Import failed: {e}")
            return False
        if not isinstance(bundle, dict):
            logger.error("Import failed: bundle is not a JSON object")
            return False

        dishes = parse_dishes(bundle.get('dishes'))
        save_quietly(self.store, DISHES_STORAGE_KEY, [d.to_dict() for d in dishes])
        save_quietly(self.store, PLAN_STORAGE_KEY, parse_plan(bundle.get('plan')))
        save_quietly(self.store, PANTRY_STORAGE_KEY, parse_pantry(bundle.get('pantry')))
        logger.info(f"Imported {len(dishes)} dishes from {input_path}")
        return True


# CLI interface
if __name__ == "__main__":
    import argparse
    from weekmenu.infra.storage import JsonFileStore
    from weekmenu.utilities.config import DATA_DIR

    parser = argparse.ArgumentParser(description='Export/Import weekly menu data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    store = JsonFileStore(DATA_DIR)

    if args.action == 'export':
        result = DataExporter(store).export_all(Path(args.file) if args.file else None)
        print(f"Exported to: {result}")
    else:
        if not args.file:
            print("Error: --file is required for import")
            raise SystemExit(1)
        if DataImporter(store).import_bundle(Path(args.file)):
            print(f"Imported from: {args.file}")
        else:
            print("Import failed")
            raise SystemExit(1)
