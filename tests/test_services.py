"""Tests for the asset registry, conversion service and menu commands."""

import os

import pytest

from ramp_convert.processing.assets import CurveAsset
from ramp_convert.processing.curves import CurveSet, PixelFormat, SourceImage
from ramp_convert.services.asset_registry import AssetRegistry
from ramp_convert.services.commands import ContextMenuRegistry, MenuCommand, RampConvertExtension
from ramp_convert.services.conversion_service import ConversionService


def _asset(name, row=0):
    return CurveAsset(f"Textures/{name}", name, row, CurveSet())


class TestAssetRegistry:

    def test_asset_created_and_find(self):
        registry = AssetRegistry()
        asset = _asset("Ramp_Curve_0")
        registry.asset_created(asset)

        assert len(registry) == 1
        assert "Textures/Ramp_Curve_0" in registry
        assert registry.find("Textures/Ramp_Curve_0") is asset
        assert registry.find("Ramp_Curve_0") is asset
        assert registry.find("Other") is None

    def test_listeners_are_notified(self):
        registry = AssetRegistry()
        seen = []
        registry.add_listener(seen.append)
        registry.asset_created(_asset("A"))
        registry.remove_listener(seen.append)
        registry.asset_created(_asset("B"))
        assert [a.asset_name for a in seen] == ["A"]

    def test_failing_listener_does_not_block_registration(self):
        registry = AssetRegistry()

        def broken(asset):
            raise RuntimeError("listener bug")

        registry.add_listener(broken)
        registry.asset_created(_asset("A"))
        assert "Textures/A" in registry

    def test_mark_dirty_requires_known_package(self):
        registry = AssetRegistry()
        with pytest.raises(KeyError):
            registry.mark_dirty("Textures/Missing")

    def test_save_dirty_clears_flags(self, tmp_path):
        registry = AssetRegistry()
        for name in ("A", "B"):
            registry.asset_created(_asset(name))
            registry.mark_dirty(f"Textures/{name}")

        saved = registry.save_dirty(str(tmp_path))

        assert len(saved) == 2
        assert all(os.path.isfile(p) for p in saved)
        assert registry.dirty_packages() == []
        assert not registry.is_dirty("Textures/A")


class TestConversionService:

    def test_generate_ramp_registers_rows(self, ramp_png, tmp_path):
        service = ConversionService(root=str(tmp_path))
        assets = service.generate_ramp(ramp_png)

        assert [a.asset_name for a in assets] == ["Ramp_Curve_0", "Ramp_Curve_1", "Ramp_Curve_2"]
        assert [a.package_name for a in assets][0] == "Ramp_Curve_0"
        assert all(a.curves.num_keys == 8 for a in assets)
        assert len(service.registry) == 3
        assert len(service.registry.dirty_packages()) == 3

    def test_alpha_rows_follow_texture(self, ramp_png, tmp_path):
        assets = ConversionService(root=str(tmp_path)).generate_ramp(ramp_png)
        assert assets[0].curves.alpha.values == [1.0] * 8
        assert assets[2].curves.alpha.values == [0.0] * 8

    def test_save_writes_files(self, ramp_png, tmp_path):
        service = ConversionService(root=str(tmp_path))
        service.generate_ramp(ramp_png)
        saved = service.save(str(tmp_path / "Curves"))
        assert sorted(os.path.basename(p) for p in saved) == [
            "Ramp_Curve_0.curve.json", "Ramp_Curve_1.curve.json", "Ramp_Curve_2.curve.json"]

    def test_same_named_textures_in_different_folders(self, tmp_path, gradient_rgba):
        from PIL import Image
        for folder in ("A", "B"):
            (tmp_path / folder).mkdir()
            Image.fromarray(gradient_rgba[:1]).save(tmp_path / folder / "Ramp.png")

        service = ConversionService(root=str(tmp_path))
        service.generate_ramps([str(tmp_path / "A" / "Ramp.png"), str(tmp_path / "B" / "Ramp.png")])
        assert sorted(service.registry.dirty_packages()) == ["A/Ramp_Curve_0", "B/Ramp_Curve_0"]

        out_dir = tmp_path / "Curves"
        saved = service.save(str(out_dir))

        assert len(set(saved)) == 2
        assert os.path.isfile(out_dir / "A" / "Ramp_Curve_0.curve.json")
        assert os.path.isfile(out_dir / "B" / "Ramp_Curve_0.curve.json")
        assert service.registry.dirty_packages() == []

    def test_unsupported_texture_yields_nothing(self):
        def loader(file_path, srgb=None):
            return SourceImage(4, 4, PixelFormat.G16, False, b"\x00" * 32, name=file_path)

        service = ConversionService(loader=loader)
        assert service.generate_ramp("deep.png") == []
        assert len(service.registry) == 0

    def test_missing_texture_yields_nothing(self):
        service = ConversionService()
        assert service.generate_ramp("/nonexistent/ramp.png") == []

    def test_loader_failure_is_contained(self):
        def loader(file_path, srgb=None):
            raise RuntimeError("decoder crashed")

        service = ConversionService(loader=loader)
        assert service.generate_ramp("ramp.png") == []

    def test_generate_ramps_reports_progress(self, ramp_png, tmp_path):
        service = ConversionService(root=str(tmp_path))
        progress = []
        results = service.generate_ramps([ramp_png, "/nonexistent/x.png"],
                                         progress_callback=lambda c, t: progress.append((c, t)))
        assert len(results[ramp_png]) == 3
        assert results["/nonexistent/x.png"] == []
        assert progress == [(1, 2), (2, 2)]


class _RecordingService:
    def __init__(self):
        self.calls = []

    def generate_ramps(self, paths):
        self.calls.append(list(paths))
        return {p: [] for p in paths}


class TestCommands:

    def test_extension_offers_command_for_textures(self):
        registry = ContextMenuRegistry()
        RampConvertExtension(_RecordingService()).startup(registry)

        commands = registry.build_menu(["a.png", "b.tga"])
        assert len(commands) == 1
        assert isinstance(commands[0], MenuCommand)
        assert commands[0].label == "Generate Curve from Ramp Texture"
        assert commands[0].section == "GetAssetActions"

    def test_mixed_or_empty_selection_gets_no_command(self):
        registry = ContextMenuRegistry()
        RampConvertExtension(_RecordingService()).startup(registry)
        assert registry.build_menu(["a.png", "notes.txt"]) == []
        assert registry.build_menu([]) == []

    def test_command_runs_conversion(self):
        service = _RecordingService()
        finished = []
        registry = ContextMenuRegistry()
        RampConvertExtension(service, on_finished=finished.append).startup(registry)

        result = registry.build_menu(["a.png"])[0].execute()

        assert service.calls == [["a.png"]]
        assert result == {"a.png": []}
        assert finished == [{"a.png": []}]

    def test_custom_runner(self):
        scheduled = []
        registry = ContextMenuRegistry()
        RampConvertExtension(_RecordingService(), runner=scheduled.append).startup(registry)
        registry.build_menu(["a.png"])[0].execute()
        assert scheduled == [["a.png"]]

    def test_shutdown_removes_extender(self):
        registry = ContextMenuRegistry()
        extension = RampConvertExtension(_RecordingService())
        extension.startup(registry)
        extension.startup(registry)  # second startup is a no-op
        assert len(registry) == 1

        extension.shutdown(registry)
        assert not extension.is_started
        assert len(registry) == 0
        assert registry.build_menu(["a.png"]) == []

    def test_remove_unknown_handle(self):
        assert ContextMenuRegistry().remove_extender(99) is False
