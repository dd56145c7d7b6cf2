"""
Local Host Handle Tests

Run with: python -m pytest studiofs/tests/test_host.py -v

Author: YSNRFD
Version: 1.0.0
"""

import os
import tempfile
import unittest
from pathlib import Path

from studiofs.core.workspace import SaveStatus, Workspace
from studiofs.exceptions import WorkspaceError
from studiofs.filesystem.host import EntryKind, LocalHandle, check_entry_name
from studiofs.main import Options, open_workspace
from studiofs.shell.shell import Shell, create_shell


class TestLocalHandle(unittest.IsolatedAsyncioTestCase):
    """Test the handle over the local disk."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name)
        (self.base / 'src').mkdir()
        (self.base / 'notes.txt').write_bytes(b'hello')
        self.handle = LocalHandle(self.base)

    async def test_kind_and_name(self):
        self.assertEqual(self.handle.kind, EntryKind.DIRECTORY)
        self.assertEqual(LocalHandle(self.base / 'notes.txt').kind, EntryKind.FILE)
        self.assertEqual(self.handle.name, self.base.name)

    async def test_entries(self):
        found = {entry.name: entry.kind async for entry in self.handle.entries()}
        self.assertEqual(found, {'src': EntryKind.DIRECTORY, 'notes.txt': EntryKind.FILE})

    async def test_read_write(self):
        notes = LocalHandle(self.base / 'notes.txt')
        self.assertEqual(await notes.read(), b'hello')

        await notes.write(b'changed')
        self.assertEqual((self.base / 'notes.txt').read_bytes(), b'changed')

    async def test_create_child_is_idempotent(self):
        lib = await self.handle.create_child('lib', EntryKind.DIRECTORY)
        again = await self.handle.create_child('lib', EntryKind.DIRECTORY)
        self.assertTrue((self.base / 'lib').is_dir())
        self.assertEqual(lib.path, again.path)

        notes = await self.handle.create_child('notes.txt', EntryKind.FILE)
        self.assertEqual(await notes.read(), b'hello')

    async def test_create_child_errors(self):
        with self.assertRaises(IsADirectoryError):
            await self.handle.create_child('src', EntryKind.FILE)
        with self.assertRaises(FileNotFoundError):
            await self.handle.create_child('missing.txt', EntryKind.FILE, create=False)
        with self.assertRaises(FileNotFoundError):
            await self.handle.create_child('missing', EntryKind.DIRECTORY, create=False)
        with self.assertRaises(ValueError):
            await self.handle.create_child('..', EntryKind.DIRECTORY)

    async def test_remove_recursive(self):
        (self.base / 'src' / 'app.js').write_bytes(b'let a;')

        await self.handle.remove('src')
        await self.handle.remove('notes.txt')

        self.assertEqual(os.listdir(self.base), [])

    def test_check_entry_name(self):
        check_entry_name('index.html')
        for name in ('', '.', '..', 'a/b'):
            with self.assertRaises(ValueError):
                check_entry_name(name)


class TestLocalWorkspace(unittest.IsolatedAsyncioTestCase):
    """Test shell commands against a real directory."""

    async def asyncSetUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name) / 'site'
        (self.base / 'src').mkdir(parents=True)
        (self.base / 'src' / 'app.js').write_bytes(b'let a = 1;')
        (self.base / 'README.md').write_bytes(b'# Site')

        self.workspace = await Workspace.open_directory(LocalHandle(self.base))
        self.shell = Shell(self.workspace)

    async def test_ingested(self):
        self.assertEqual(self.workspace.tree.root.name, 'site')
        self.assertEqual(await self.shell.execute('ls'), '[src]  README.md')
        self.assertEqual(self.workspace.session.active_tab_id, 'root_README.md')
        self.assertEqual(await self.shell.execute('cat README.md'), '# Site')

    async def test_mkdir_and_touch_reach_disk(self):
        self.assertEqual(await self.shell.execute('mkdir lib'), "Directory 'lib' created.")
        await self.shell.execute('cd lib')
        self.assertEqual(await self.shell.execute('touch util.js'), "File 'util.js' created.")

        self.assertTrue((self.base / 'lib').is_dir())
        self.assertEqual((self.base / 'lib' / 'util.js').read_bytes(), b'')
        self.assertTrue(self.workspace.tree.find('root_lib_util.js').is_native)

    async def test_rm_reaches_disk(self):
        self.assertEqual(await self.shell.execute('rm src'), '')

        self.assertFalse((self.base / 'src').exists())
        self.assertIsNone(self.workspace.tree.find('root_src_app.js'))

    async def test_save_reaches_disk(self):
        self.workspace.edit('root_README.md', '# Edited')

        result = await self.workspace.save_active()

        self.assertEqual(result.status, SaveStatus.SAVED)
        self.assertEqual((self.base / 'README.md').read_bytes(), b'# Edited')


class TestOpenWorkspace(unittest.IsolatedAsyncioTestCase):
    """Test how the entry point picks a workspace."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name) / 'site'
        self.base.mkdir()
        (self.base / 'index.html').write_bytes(b'<p>hi</p>')

    async def test_no_directory_is_seeded(self):
        workspace = await open_workspace(Options())
        self.assertEqual(workspace.tree.root.name, 'Project')
        self.assertEqual(create_shell(workspace).workspace, workspace)

    async def test_native(self):
        workspace = await open_workspace(Options(directory=str(self.base)))

        self.assertTrue(workspace.tree.root.is_native)
        self.assertEqual(workspace.session.active_tab_id, 'root_index.html')

    async def test_virtual_snapshot(self):
        """--virtual copies the directory into memory and never writes back."""
        workspace = await open_workspace(Options(directory=str(self.base), virtual=True))
        shell = Shell(workspace)

        self.assertEqual(await shell.execute('ls'), '[site]')
        await shell.execute('cd site')
        self.assertEqual(await shell.execute('touch new.txt'), "Virtual file 'new.txt' created.")
        self.assertFalse((self.base / 'new.txt').exists())

    async def test_not_a_directory(self):
        with self.assertRaises(WorkspaceError):
            await open_workspace(Options(directory=str(self.base / 'index.html')))


if __name__ == '__main__':
    unittest.main()
