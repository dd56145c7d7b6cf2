"""
Backing Adapter Tests

Run with: python -m pytest studiofs/tests/test_backing.py -v

Author: YSNRFD
Version: 1.0.0
"""

import unittest

from studiofs.exceptions import HostIOError, NodeExistsError
from studiofs.filesystem.backing import BackingAdapter
from studiofs.filesystem.node import NodeKind, NativeBacking, VirtualBacking, ROOT_ID, new_file, new_folder
from studiofs.filesystem.tree import NodeTree
from studiofs.tests.fakes import FakeHandle


class TestBackingAdapter(unittest.IsolatedAsyncioTestCase):
    """Test create/remove/read/write across both backings."""

    def setUp(self):
        self.host = FakeHandle.directory(
            'proj',
            FakeHandle.directory('src', FakeHandle.file('app.js', b'let a;')),
            FakeHandle.file('notes.txt', b'notes'),
        )
        self.tree = NodeTree('proj', root_backing=NativeBacking(self.host))
        src_handle = self.host.children['src']
        src = self.tree.add_child(ROOT_ID, new_folder(ROOT_ID, 'src', handle=src_handle))
        self.tree.add_child(src.id, new_file(src.id, 'app.js', content=None, handle=src_handle.children['app.js']))
        self.tree.add_child(
            ROOT_ID, new_file(ROOT_ID, 'notes.txt', content=None, handle=self.host.children['notes.txt'])
        )
        self.adapter = BackingAdapter(self.tree)

    async def test_native_create(self):
        """Under a native folder the host entry is created first."""
        result = await self.adapter.create(ROOT_ID, 'lib', NodeKind.FOLDER)

        self.assertTrue(result.native)
        self.assertFalse(result.fell_back)
        self.assertIsInstance(result.node.backing, NativeBacking)
        self.assertIn('lib', self.host.children)
        self.assertIs(self.tree.find('root_lib'), result.node)

    async def test_native_create_file_is_empty(self):
        result = await self.adapter.create(ROOT_ID, 'new.py', NodeKind.FILE)

        self.assertEqual(result.node.content, '')
        self.assertEqual(result.node.classification, 'python')
        self.assertEqual(self.host.children['new.py'].kind.value, 'file')

    async def test_failed_native_create_falls_back(self):
        """A host failure produces a virtual node and a warning."""
        self.host.fail.add('create')

        with self.assertLogs('studiofs.backing', level='WARNING'):
            result = await self.adapter.create(ROOT_ID, 'lib', NodeKind.FOLDER)

        self.assertFalse(result.native)
        self.assertTrue(result.fell_back)
        self.assertIsInstance(result.error, HostIOError)
        self.assertIsInstance(result.node.backing, VirtualBacking)
        self.assertNotIn('lib', self.host.children)
        self.assertEqual(self.tree.validate(), [])

    async def test_virtual_create(self):
        tree = NodeTree('Project')
        adapter = BackingAdapter(tree)

        result = await adapter.create(ROOT_ID, 'a.txt', NodeKind.FILE)

        self.assertFalse(result.native)
        self.assertFalse(result.fell_back)
        self.assertEqual(result.node.content, '')

    async def test_create_existing(self):
        """An existing id is refused before the host is touched."""
        self.host.fail.add('create')

        with self.assertRaises(NodeExistsError):
            await self.adapter.create(ROOT_ID, 'notes.txt', NodeKind.FILE)

    async def test_native_remove(self):
        removed = await self.adapter.remove('root_src')

        self.assertEqual(removed, {'root_src', 'root_src_app.js'})
        self.assertNotIn('src', self.host.children)
        self.assertIsNone(self.tree.find('root_src'))

    async def test_failed_native_remove_leaves_tree(self):
        """A host delete failure aborts before the tree changes."""
        self.host.fail.add('remove')

        with self.assertRaises(HostIOError) as ctx:
            await self.adapter.remove('root_src')

        self.assertEqual(ctx.exception.operation, 'delete')
        self.assertIsNotNone(self.tree.find('root_src'))
        self.assertIsNotNone(self.tree.find('root_src_app.js'))
        self.assertIn('src', self.host.children)
        self.assertEqual(self.tree.validate(), [])

    async def test_remove_virtual_fallback_under_native(self):
        """Virtual nodes are removed from the tree only."""
        self.host.fail.add('create')
        await self.adapter.create(ROOT_ID, 'draft.txt', NodeKind.FILE)
        self.host.fail = {'remove'}

        removed = await self.adapter.remove('root_draft.txt')

        self.assertEqual(removed, {'root_draft.txt'})

    async def test_read(self):
        self.assertEqual(await self.adapter.read('root_notes.txt'), b'notes')

        self.host.children['notes.txt'].fail.add('read')
        with self.assertRaises(HostIOError):
            await self.adapter.read('root_notes.txt')

    async def test_write(self):
        self.assertTrue(await self.adapter.write('root_notes.txt', 'héllo'))
        self.assertEqual(self.host.children['notes.txt'].data, 'héllo'.encode('utf-8'))

        self.host.children['notes.txt'].fail.add('write')
        with self.assertRaises(HostIOError):
            await self.adapter.write('root_notes.txt', 'again')

    async def test_write_virtual_has_nothing_to_persist(self):
        tree = NodeTree('Project')
        tree.add_child(ROOT_ID, new_file(ROOT_ID, 'a.txt', content='a'))

        self.assertFalse(await BackingAdapter(tree).write('root_a.txt', 'b'))

    async def test_list_entries(self):
        names = sorted(h.name for h in await self.adapter.list_entries(self.host))
        self.assertEqual(names, ['notes.txt', 'src'])

        self.host.fail.add('list')
        with self.assertLogs('studiofs.backing', level='WARNING'):
            self.assertEqual(await self.adapter.list_entries(self.host), [])


if __name__ == '__main__':
    unittest.main()
