import unittest

from System.cofilter.dataset import Dataset


class TestDataset(unittest.TestCase):
    def setUp(self):
        self.data = Dataset()
        self.data.set_value('Toby', 'Snakes on a Plane', 4.5)
        self.data.set_value('Toby', 'Superman Returns', 4.0)
        self.data.add_category('Empty')

    def test_contains_category(self):
        self.assertTrue(self.data.contains_category('Toby'))
        self.assertTrue(self.data.contains_category('Empty'))
        self.assertFalse(self.data.contains_category('Nobody'))
        self.assertIn('Toby', self.data)

    def test_contains_feature(self):
        self.assertTrue(self.data.contains_feature('Toby', 'Snakes on a Plane'))
        self.assertFalse(self.data.contains_feature('Toby', 'Just My Luck'))
        self.assertFalse(self.data.contains_feature('Nobody', 'Snakes on a Plane'))

    def test_add_category_is_idempotent(self):
        self.data.add_category('Toby')
        self.assertEqual(self.data.feature_names('Toby'), ['Snakes on a Plane', 'Superman Returns'])
        self.assertEqual(len(self.data), 2)

    def test_set_value_creates_category_implicitly(self):
        self.data.set_value('Lisa Rose', 'Just My Luck', 3)
        self.assertTrue(self.data.contains_category('Lisa Rose'))
        self.assertEqual(self.data.get_value('Lisa Rose', 'Just My Luck'), 3.0)
        self.assertIsInstance(self.data.get_value('Lisa Rose', 'Just My Luck'), float)

    def test_set_value_overwrites(self):
        self.data.set_value('Toby', 'Snakes on a Plane', 1.0)
        self.assertEqual(self.data.get_value('Toby', 'Snakes on a Plane'), 1.0)
        self.assertEqual(self.data.n_observations, 2)

    def test_get_value_defaults_without_mutating(self):
        self.assertEqual(self.data.get_value('Toby', 'Just My Luck'), 0.0)
        self.assertEqual(self.data.get_value('Nobody', 'Just My Luck'), 0.0)
        self.assertFalse(self.data.contains_feature('Toby', 'Just My Luck'))
        self.assertFalse(self.data.contains_category('Nobody'))

    def test_names_keep_insertion_order(self):
        self.assertEqual(self.data.category_names(), ['Toby', 'Empty'])
        self.assertEqual(list(self.data), ['Toby', 'Empty'])
        self.assertEqual(self.data.feature_names('Empty'), [])
        self.assertEqual(self.data.feature_names('Nobody'), [])

    def test_get_features_returns_copy(self):
        features = self.data.get_features('Toby')
        features['Just My Luck'] = 5.0
        self.assertFalse(self.data.contains_feature('Toby', 'Just My Luck'))
        self.assertEqual(self.data.get_features('Nobody'), {})

    def test_mutual_features(self):
        self.data.set_value('Lisa Rose', 'Superman Returns', 3.5)
        self.data.set_value('Lisa Rose', 'Lady in the Water', 2.5)
        self.assertEqual(self.data.mutual_features('Toby', 'Lisa Rose'), ['Superman Returns'])
        self.assertEqual(self.data.mutual_features('Toby', 'Empty'), [])
        self.assertEqual(self.data.mutual_features('Toby', 'Nobody'), [])

    def test_update_merges_and_overwrites(self):
        other = Dataset()
        other.set_value('Toby', 'Snakes on a Plane', 1.0)
        other.set_value('Lisa Rose', 'Just My Luck', 3.0)
        other.add_category('Also Empty')
        self.data.update(other)
        self.assertEqual(self.data.category_names(), ['Toby', 'Empty', 'Lisa Rose', 'Also Empty'])
        self.assertEqual(self.data.get_value('Toby', 'Snakes on a Plane'), 1.0)
        self.assertEqual(self.data.get_value('Toby', 'Superman Returns'), 4.0)

    def test_rejects_invalid_input(self):
        with self.assertRaises(ValueError):
            self.data.set_value('Toby', 'Just My Luck', 'great')
        with self.assertRaises(ValueError):
            self.data.set_value('Toby', 'Just My Luck', float('nan'))
        with self.assertRaises(ValueError):
            self.data.set_value('Toby', '', 1.0)
        with self.assertRaises(ValueError):
            self.data.add_category('')
        self.assertFalse(self.data.contains_feature('Toby', 'Just My Luck'))


if __name__ == '__main__':
    unittest.main()
