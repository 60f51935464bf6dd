import json
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_alias_normalization_resolves_canonical_group(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical = taxonomy.normalize_skill("  ReactJS ")
        self.assertEqual(normalized, "reactjs")
        self.assertEqual(canonical, "react")
        self.assertEqual(taxonomy.normalize_skill("Golang")[1], "go")
        self.assertIsNone(taxonomy.normalize_skill("basket weaving")[1])

    def test_groups_containing_respects_word_boundaries(self):
        taxonomy = LocalTaxonomy()
        self.assertIn("react", taxonomy.groups_containing("Built dashboards in React.js"))
        self.assertIn("nodejs", taxonomy.groups_containing("REST services on Node.js"))
        self.assertNotIn("go", taxonomy.groups_containing("Good communication"))
        self.assertNotIn("nodejs", taxonomy.groups_containing("Able to express ideas clearly"))
        self.assertNotIn("api", taxonomy.groups_containing("Shifts include rest breaks"))
        self.assertIn("api", taxonomy.groups_containing("Designed REST APIs for billing"))

    def test_custom_groups_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "groups.json"
            path.write_text(json.dumps({"Terraform": ["tf", "hcl"]}), encoding="utf-8")
            taxonomy = LocalTaxonomy(path)
        self.assertEqual(taxonomy.groups(), {"terraform": ("terraform", "tf", "hcl")})
        self.assertEqual(taxonomy.normalize_skill("HCL")[1], "terraform")


if __name__ == "__main__":
    unittest.main()
