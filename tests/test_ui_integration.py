"""
Integration tests for UI components.

These tests verify that the asset browser and main window wire the
context menu registry and conversion service together.
"""

import os

import pytest

# Skip all tests if PyQt6 is not available
pytest.importorskip("PyQt6")

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def qapp():
    """Create a QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def texture_folder(tmp_path, ramp_png):
    (tmp_path / "notes.txt").write_text("not a texture", encoding="utf-8")
    return str(tmp_path)


class TestAssetBrowser:

    def test_lists_only_textures(self, qapp, texture_folder):
        from ramp_convert.services.commands import ContextMenuRegistry
        from ramp_convert.ui.asset_browser import AssetBrowserWidget

        browser = AssetBrowserWidget(ContextMenuRegistry())
        assert browser.set_folder(texture_folder) == 1
        assert browser.item(0).text() == "Ramp.png"

    def test_missing_folder(self, qapp):
        from ramp_convert.services.commands import ContextMenuRegistry
        from ramp_convert.ui.asset_browser import AssetBrowserWidget

        browser = AssetBrowserWidget(ContextMenuRegistry())
        assert browser.set_folder("/nonexistent/folder") == 0

    def test_context_menu_from_registry(self, qapp, ramp_png):
        from ramp_convert.services.commands import ContextMenuRegistry, RampConvertExtension
        from ramp_convert.ui.asset_browser import AssetBrowserWidget

        calls = []
        registry = ContextMenuRegistry()
        RampConvertExtension(service=None, runner=calls.append).startup(registry)
        browser = AssetBrowserWidget(registry)

        menu = browser.build_menu([ramp_png])
        actions = menu.actions()
        assert [a.text() for a in actions] == ["Generate Curve from Ramp Texture"]

        actions[0].trigger()
        assert calls == [[ramp_png]]

        assert browser.build_menu([]) is None

    def test_thumbnail(self, qapp, ramp_png):
        from ramp_convert.ui.asset_browser import make_thumbnail

        pixmap = make_thumbnail(ramp_png, 64)
        assert pixmap is not None
        assert pixmap.width() == 64
        assert make_thumbnail("/nonexistent.png", 64) is None


class TestMainWindow:

    def test_window_creation(self, qapp):
        from ramp_convert.ui.main_window import MainWindow

        window = MainWindow()
        try:
            assert window.windowTitle() == "Ramp Convert"
            assert window.extension.is_started
            assert not window.save_action.isEnabled()
        finally:
            window.shutdown()
        assert not window.extension.is_started

    def test_load_folder_sets_service_root(self, qapp, texture_folder):
        from ramp_convert.ui.main_window import MainWindow

        window = MainWindow()
        try:
            assert window.load_folder(texture_folder) == 1
            assert window.service.root == texture_folder
            assert window.default_output_dir() == os.path.join(texture_folder, "Curves")
        finally:
            window.shutdown()

    def test_finished_conversion_enables_save(self, qapp, ramp_png, tmp_path):
        from ramp_convert.ui.main_window import MainWindow

        window = MainWindow()
        try:
            window.load_folder(str(tmp_path))
            results = window.service.generate_ramps([ramp_png])
            window._on_conversion_finished(results)
            assert window.save_action.isEnabled()

            window.output_dir = str(tmp_path / "out")
            window.save_curves()
            assert len(os.listdir(tmp_path / "out")) == 3
            assert not window.save_action.isEnabled()
        finally:
            window.shutdown()


    def test_queued_conversion_disables_actions(self, qapp, ramp_png, tmp_path):
        import time
        from ramp_convert.ui.main_window import MainWindow

        window = MainWindow()
        try:
            window.load_folder(str(tmp_path))
            window.request_conversion([ramp_png])
            assert window.is_busy
            assert not window.save_action.isEnabled()
            assert not window.open_folder_action.isEnabled()
            assert not window.convert_files_action.isEnabled()

            # A second request while busy is ignored
            window.request_conversion([ramp_png])

            deadline = time.monotonic() + 10
            while window.is_busy and time.monotonic() < deadline:
                qapp.processEvents()
                time.sleep(0.01)

            assert not window.is_busy
            assert window.open_folder_action.isEnabled()
            assert window.save_action.isEnabled()
            assert len(window.service.registry) == 3
        finally:
            window.shutdown()

class TestConversionWorker:

    def test_run_emits_results(self, qapp, ramp_png, tmp_path):
        from ramp_convert.services.conversion_service import ConversionService
        from ramp_convert.ui.workers import ConversionWorker

        worker = ConversionWorker(ConversionService(root=str(tmp_path)))
        finished, progress = [], []
        worker.finished.connect(finished.append)
        worker.progress.connect(lambda current, total: progress.append((current, total)))

        worker.run([ramp_png])

        assert len(finished) == 1
        assert len(finished[0][ramp_png]) == 3
        assert progress == [(1, 1)]
        assert not worker.is_running
