import unittest

import detectmtu


class TestInit(unittest.TestCase):
    def test_version_is_exposed(self) -> None:
        self.assertTrue(hasattr(detectmtu, "__version__"))
        self.assertIsInstance(detectmtu.__version__, str)
        self.assertRegex(detectmtu.__version__, r"^\d+\.\d+\.\d+$")


if __name__ == "__main__":
    unittest.main(verbosity=2)
