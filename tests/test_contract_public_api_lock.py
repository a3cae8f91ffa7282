from __future__ import annotations

import unittest


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_module_exports_are_present(self) -> None:
        import weekgrid.api as api

        self.assertTrue(hasattr(api, "__all__"))
        self.assertIsInstance(api.__all__, (list, tuple))
        self.assertEqual(len(api.__all__), len(api._PUBLIC_EXPORTS))

        for name in api.__all__:
            self.assertIsInstance(name, str)
            self.assertTrue(hasattr(api, name), f"weekgrid.api missing public name: {name}")
            obj = getattr(api, name)
            self.assertIsNotNone(obj, f"weekgrid.api {name} is None")

    def test_package_reexports_match_api_all(self) -> None:
        import weekgrid
        import weekgrid.api as api

        for name in api.__all__:
            self.assertTrue(hasattr(weekgrid, name), f"weekgrid package does not re-export: {name}")
            self.assertIs(getattr(weekgrid, name), getattr(api, name), f"weekgrid.{name} must be same object as weekgrid.api.{name}")

    def test_public_exports_are_sorted_and_unique(self) -> None:
        import weekgrid.api as api

        self.assertIsInstance(api._PUBLIC_EXPORTS, tuple)
        self.assertEqual(len(set(api._PUBLIC_EXPORTS)), len(api._PUBLIC_EXPORTS))
        self.assertEqual(list(api._PUBLIC_EXPORTS), sorted(api._PUBLIC_EXPORTS))
        self.assertEqual(api.__all__, [n for n in api._PUBLIC_EXPORTS if n in api.__dict__])


if __name__ == "__main__":
    unittest.main(verbosity=2)
