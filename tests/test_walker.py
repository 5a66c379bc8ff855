"""Tests for mac_installer_scan.services.walker_service."""
import os
import shutil
import tempfile
import unittest

from mac_installer_scan.core.models import ExtensionClass, ScanRoot
from mac_installer_scan.services.scanner_service import Scanner
from mac_installer_scan.services.lister_service import NullLister
from mac_installer_scan.services.walker_service import (
    FdWalker,
    ScandirWalker,
    WalkerError,
    entry_depth,
    extension_class,
    match_entry,
)


def touch(path, data=b""):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return path


def found(scanner, root, max_depth=2):
    return {c.path for c in scanner.scan_root(ScanRoot(root, max_depth))}


class TestMatching(unittest.TestCase):
    def test_extension_class_ignores_case(self) -> None:
        self.assertIs(extension_class("App.DMG"), ExtensionClass.DIRECT_INSTALLER)
        self.assertIs(extension_class("setup.Pkg"), ExtensionClass.DIRECT_INSTALLER)
        self.assertIs(extension_class("bundle.mpkg"), ExtensionClass.DIRECT_INSTALLER)
        self.assertIs(extension_class("disc.iso"), ExtensionClass.DIRECT_INSTALLER)
        self.assertIs(extension_class("App.ZIP"), ExtensionClass.ARCHIVE)
        self.assertIsNone(extension_class("document.pdf"))
        self.assertIsNone(extension_class("dmg"))
        self.assertIsNone(extension_class("App.dmg.part"))

    def test_entry_depth(self) -> None:
        root = os.path.join(os.sep, "r")
        self.assertEqual(entry_depth(root, os.path.join(root, "a.dmg")), 1)
        self.assertEqual(entry_depth(root, os.path.join(root, "x", "y", "a.dmg")), 3)
        self.assertEqual(entry_depth(root, root), 0)
        self.assertEqual(entry_depth(root, os.path.join(os.sep, "other", "a.dmg")), 0)


class WalkerCase(unittest.TestCase):
    walker_factory = ScandirWalker

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = os.path.realpath(tmp.name)
        self.scanner = Scanner(walker=self.walker_factory(), lister=NullLister())

    def p(self, *parts):
        return os.path.join(self.root, *parts)


class TestScandirWalker(WalkerCase):
    def test_missing_root_yields_nothing(self) -> None:
        self.assertEqual(found(self.scanner, self.p("does-not-exist")), set())

    def test_root_that_is_a_file_yields_nothing(self) -> None:
        touch(self.p("file.dmg"))
        self.assertEqual(found(self.scanner, self.p("file.dmg")), set())

    def test_extension_case_does_not_matter(self) -> None:
        a = touch(self.p("App.DMG"))
        b = touch(self.p("tool.Zip"))
        touch(self.p("notes.txt"))
        self.assertEqual(found(self.scanner, self.root), {a, b})

    def test_end_to_end_direct_installers(self) -> None:
        expected = {touch(self.p(n)) for n in ("App1.dmg", "App2.pkg", "App3.iso", "App.mpkg")}
        touch(self.p("document.pdf"))
        self.assertEqual(found(self.scanner, self.root), expected)

    def test_symlinks_are_excluded(self) -> None:
        target = touch(self.p("real", "Real.dmg"))
        os.symlink(target, self.p("Link.dmg"))
        os.symlink(self.p("missing.pkg"), self.p("Dangling.pkg"))
        self.assertEqual(found(self.scanner, self.root), {target})

    def test_symlinked_directories_are_not_descended(self) -> None:
        outside = tempfile.TemporaryDirectory()
        self.addCleanup(outside.cleanup)
        touch(os.path.join(outside.name, "Outside.dmg"))
        os.symlink(outside.name, self.p("linked"))
        self.assertEqual(found(self.scanner, self.root), set())

    def test_depth_boundary(self) -> None:
        top = touch(self.p("Top.dmg"))
        at_max = touch(self.p("a", "AtMax.pkg"))
        touch(self.p("a", "b", "TooDeep.iso"))
        self.assertEqual(found(self.scanner, self.root, 2), {top, at_max})
        self.assertEqual(found(self.scanner, self.root, 1), {top})
        self.assertEqual(len(found(self.scanner, self.root, 3)), 3)

    def test_directories_named_like_installers_are_skipped(self) -> None:
        os.makedirs(self.p("Fake.pkg"))
        inner = touch(self.p("Fake.pkg", "Inner.dmg"))
        self.assertEqual(found(self.scanner, self.root), {inner})

    def test_hidden_entries_are_included(self) -> None:
        hidden = touch(self.p(".cache", "Hidden.dmg"))
        self.assertEqual(found(self.scanner, self.root), {hidden})

    @unittest.skipIf(hasattr(os, "geteuid") and os.geteuid() == 0, "root ignores permissions")
    def test_unreadable_directory_is_skipped(self) -> None:
        ok = touch(self.p("Ok.dmg"))
        touch(self.p("locked", "Locked.dmg"))
        os.chmod(self.p("locked"), 0)
        self.addCleanup(os.chmod, self.p("locked"), 0o755)
        self.assertEqual(found(self.scanner, self.root), {ok})

    def test_repeated_scans_are_stable(self) -> None:
        for n in ("a.dmg", "b.pkg", os.path.join("x", "c.iso")):
            touch(self.p(n))
        self.assertEqual(found(self.scanner, self.root), found(self.scanner, self.root))

    def test_match_entry_rejects_paths_outside_root(self) -> None:
        other = tempfile.TemporaryDirectory()
        self.addCleanup(other.cleanup)
        path = touch(os.path.join(other.name, "x.dmg"))
        self.assertIsNone(match_entry(self.root, path, 2))


class FailingWalker:
    name = "failing"

    def walk(self, root, max_depth):
        raise WalkerError("boom")


class TestFallback(WalkerCase):
    walker_factory = FailingWalker

    def test_failing_walker_falls_back_to_scandir(self) -> None:
        a = touch(self.p("a.dmg"))
        self.assertEqual(found(self.scanner, self.root), {a})


class TestFdWalkerCommand(unittest.TestCase):
    def test_unavailable_fd_raises(self) -> None:
        walker = FdWalker()
        walker.binary = None
        self.assertFalse(walker.available())
        with self.assertRaises(WalkerError):
            walker.walk("/tmp", 2)

    def test_command_is_bounded_and_excludes_links(self) -> None:
        cmd = FdWalker(binary="fd").command("/tmp/root", 3)
        self.assertEqual(cmd[0], "fd")
        self.assertIn("--max-depth", cmd)
        self.assertEqual(cmd[cmd.index("--max-depth") + 1], "3")
        self.assertEqual(cmd[cmd.index("--type") + 1], "f")
        self.assertNotIn("--follow", cmd)
        self.assertIn("--ignore-case", cmd)
        self.assertEqual(cmd[-2], r"\.(dmg|iso|mpkg|pkg|zip)$")
        self.assertEqual(cmd[-1], "/tmp/root")


@unittest.skipUnless(shutil.which("fd") or shutil.which("fdfind"), "fd not installed")
class TestFdWalker(TestScandirWalker):
    walker_factory = FdWalker


@unittest.skipUnless(shutil.which("fd") or shutil.which("fdfind"), "fd not installed")
class TestWalkerEquivalence(WalkerCase):
    def test_fd_and_scandir_agree(self) -> None:
        names = [
            "A.dmg", "b.PKG", "c.txt", ".hidden.iso",
            os.path.join("d1", "E.zip"), os.path.join("d1", "d2", "F.mpkg"),
            os.path.join("d1", "d2", "d3", "G.dmg"),
        ]
        for n in names:
            touch(self.p(n))
        os.symlink(self.p("A.dmg"), self.p("d1", "Link.dmg"))
        os.symlink(self.p("nowhere.pkg"), self.p("Dangling.pkg"))
        fd = Scanner(walker=FdWalker(), lister=NullLister())
        portable = Scanner(walker=ScandirWalker(), lister=NullLister())
        for depth in (1, 2, 3, 4):
            self.assertEqual(found(fd, self.root, depth), found(portable, self.root, depth), depth)


if __name__ == "__main__":
    unittest.main()
