"""
Path Resolver Tests

Run with: python -m pytest studiofs/tests/test_path_resolver.py -v

Author: YSNRFD
Version: 1.0.0
"""

import unittest

from studiofs.exceptions import DirectoryLostError, NodeNotFoundError
from studiofs.filesystem.node import ROOT_ID, new_file, new_folder
from studiofs.filesystem.path_resolver import PathResolver, WorkingDirectory
from studiofs.filesystem.tree import NodeTree


class TestPathResolver(unittest.TestCase):
    """Test relative path splitting."""

    def test_parse(self):
        self.assertEqual(PathResolver.parse('myProject/src/app.js').components, ['myProject', 'src', 'app.js'])
        self.assertEqual(PathResolver.parse('a//b/./c/').components, ['a', 'b', 'c'])
        self.assertEqual(PathResolver.parse('').components, [])
        self.assertEqual(str(PathResolver.parse('a//b')), 'a/b')

    def test_split(self):
        self.assertEqual(PathResolver.split('src/sub/b.txt'), (['src', 'sub'], 'b.txt'))
        self.assertEqual(PathResolver.split('c.txt'), ([], 'c.txt'))
        self.assertEqual(PathResolver.split(''), ([], ''))


class TestWorkingDirectory(unittest.TestCase):
    """Test the working-directory stack."""

    def setUp(self):
        self.tree = NodeTree('Project')
        src = self.tree.add_child(ROOT_ID, new_folder(ROOT_ID, 'src'))
        self.tree.add_child(src.id, new_folder(src.id, 'my_lib'))
        self.tree.add_child(ROOT_ID, new_file(ROOT_ID, 'notes'))
        self.cwd = WorkingDirectory(self.tree)

    def test_initial_state(self):
        self.assertEqual(self.cwd.stack, (ROOT_ID,))
        self.assertEqual(self.cwd.current().id, ROOT_ID)
        self.assertEqual(self.cwd.display(), '/root')
        self.assertEqual(self.cwd.current_name(), 'root')

    def test_push_and_display(self):
        """Names are recovered from ids, underscores included."""
        self.cwd.push('src')
        self.cwd.push('my_lib')

        self.assertEqual(self.cwd.stack, ('root', 'root_src', 'root_src_my_lib'))
        self.assertEqual(self.cwd.display(), '/root/src/my_lib')
        self.assertEqual(self.cwd.current_name(), 'my_lib')

    def test_push_miss_leaves_stack(self):
        with self.assertRaises(NodeNotFoundError):
            self.cwd.push('nope')
        # Files are not directories, and matching is case-sensitive
        with self.assertRaises(NodeNotFoundError):
            self.cwd.push('notes')
        with self.assertRaises(NodeNotFoundError):
            self.cwd.push('SRC')

        self.assertEqual(self.cwd.stack, (ROOT_ID,))

    def test_pop(self):
        self.assertFalse(self.cwd.pop())
        self.assertEqual(len(self.cwd), 1)

        self.cwd.push('src')
        self.assertTrue(self.cwd.pop())
        self.assertEqual(self.cwd.stack, (ROOT_ID,))

    def test_directory_lost(self):
        """A removed current directory is reported, not silently replaced."""
        self.cwd.push('src')
        self.tree.remove_subtree('root_src')

        with self.assertRaises(DirectoryLostError):
            self.cwd.current()
        with self.assertRaises(DirectoryLostError):
            self.cwd.push('my_lib')

    def test_evict(self):
        self.cwd.push('src')
        self.cwd.push('my_lib')

        self.assertFalse(self.cwd.evict({'root_other'}))
        self.assertTrue(self.cwd.evict(self.tree.remove_subtree('root_src')))
        self.assertEqual(self.cwd.stack, (ROOT_ID,))

    def test_reset(self):
        self.cwd.push('src')
        self.cwd.reset()
        self.assertEqual(self.cwd.stack, (ROOT_ID,))


if __name__ == '__main__':
    unittest.main()
