"""
Tests for the PDK rule table and via drawing.
"""

import pytest

from tessera.errors import NoViaFit, UnsupportedViaLayerPair
from tessera.geometry import Dims, Dir, Rect
from tessera.layout.via import ViaExpansion, ViaParams, ViaSelector
from tessera.pdk import Pdk, load_pdk


class TestPdkRules:

    def test_bundled_table(self, pdk):
        assert pdk.name == 'sky130'
        assert pdk.layout_grid == 5
        assert len(pdk.via_rules) == 8

    def test_via_rule_by_layers(self, pdk, li1, met1):
        rule = pdk.via_rule(li1, met1)
        assert rule.name == 'mcon'
        assert rule.size == 170
        assert rule.via == pdk.layer('mcon')

    def test_unsupported_pair(self, pdk, met1, met3):
        with pytest.raises(UnsupportedViaLayerPair):
            pdk.via_rule(met1, met3)

    def test_unsupported_pair_is_lookup_error(self, pdk, met1, met3):
        with pytest.raises(LookupError):
            pdk.via_rule(met3, met1)

    def test_unknown_name(self, pdk):
        with pytest.raises(UnsupportedViaLayerPair, match='via9'):
            pdk.resolve(ViaSelector.by_name('via9'))

    def test_unknown_layer(self, pdk):
        with pytest.raises(KeyError):
            pdk.layer('met9')

    def test_connectivity_flags(self, pdk):
        assert pdk.layer('met1').connectivity
        assert not pdk.layer('npc').connectivity

    def test_fixed_extension_direction(self, pdk, li1, met1):
        rule = pdk.via_rule(li1, met1)
        dims = rule.array_dims(top_fixed=Dir.HORIZ)
        assert dims.top_extension == Dims(60, 30)
        assert dims.top_fixed
        assert not dims.bot_fixed
        assert rule.array_dims().top_extension == Dims(30, 60)


class TestViaLayout:

    def test_mcon_by_name(self, pdk):
        rect = Rect.from_xy(0, 0, 1000, 1000)
        params = ViaParams(ViaSelector.by_name('mcon'), rect, rect)
        group = pdk.via_layout(params)
        assert len([e for e in group.elements if e.layer == pdk.layer('mcon')]) == 6
        assert group.bbox().into_rect().contains(rect.center())

    def test_equal_configurations_keep_the_last_tried(self, pdk, li1, met1):
        # Every orientation fits 5x5 cuts with no overshoot; the last one tried
        # transposes the met1 extension
        rect = Rect.from_xy(0, 0, 2000, 2000)
        group = pdk.via_layout(ViaParams.builder().layers(li1, met1).geometry(rect, rect).build())
        assert len([e for e in group.elements if e.layer == pdk.layer('mcon')]) == 25
        assert group.layer_bbox(met1).into_rect().dims() == Dims(1730, 1670)

    def test_rects_on_grid(self, pdk, met1, met2):
        bot = Rect.from_xy(3, 0, 763, 2000)
        top = Rect.from_xy(0, 7, 2000, 511)
        params = ViaParams.builder().layers(met1, met2).geometry(bot, top).build()
        group = pdk.via_layout(params)
        assert group.elements
        assert all(e.shape.is_on_grid(5) for e in group.elements)

    def test_poly_contact_enclosure(self, pdk, li1):
        poly = pdk.layer('poly')
        rect = Rect.from_xy(0, 0, 500, 500)
        params = ViaParams.builder().layers(poly, li1).geometry(rect, rect).build()
        group = pdk.via_layout(params)
        cuts = group.layer_bbox(pdk.layer('licon1')).into_rect()
        assert group.layer_bbox(pdk.layer('npc')).into_rect() == cuts.expand(100)

    def test_no_enclosure_elsewhere(self, pdk, li1, met1):
        rect = Rect.from_xy(0, 0, 500, 500)
        group = pdk.via_layout(ViaParams.builder().layers(li1, met1).geometry(rect, rect).build())
        assert group.layer_bbox(pdk.layer('npc')).is_empty()

    def test_expansion_policy_is_forwarded(self, pdk, li1, met1):
        rect = Rect.from_xy(0, 0, 100, 100)
        params = (ViaParams.builder().layers(li1, met1).geometry(rect, rect)
                  .expand(ViaExpansion.NONE).build())
        with pytest.raises(NoViaFit):
            pdk.via_layout(params)


class TestPdkLoading:

    def test_from_dict_undefined_layer(self):
        data = {
            'name': 'tiny', 'layout_grid': 1,
            'layers': {'m1': {'connectivity': True}},
            'vias': {'v1': {'bot': 'm1', 'top': 'm2', 'via': 'v1', 'size': 1, 'space': 1,
                            'bot_ext': 0, 'bot_ext_one': 0, 'top_ext': 0, 'top_ext_one': 0}},
        }
        with pytest.raises(ValueError, match="m2"):
            Pdk.from_dict(data)

    def test_from_dict(self):
        data = {
            'name': 'tiny', 'layout_grid': 1,
            'layers': {'m1': {'connectivity': True}, 'm2': {'connectivity': True},
                       'v1': {'connectivity': True}},
            'vias': {'v1': {'bot': 'm1', 'top': 'm2', 'via': 'v1', 'size': 2, 'space': 2,
                            'bot_ext': 1, 'bot_ext_one': 1, 'top_ext': 1, 'top_ext_one': 1}},
        }
        pdk = Pdk.from_dict(data)
        assert pdk.via_rule(pdk.layer('m1'), pdk.layer('m2')).size == 2

    def test_invalid_grid(self):
        with pytest.raises(ValueError):
            Pdk('bad', {}, [], 0)

    def test_load_bundled(self):
        assert load_pdk('sky130').name == 'sky130'

    def test_load_from_path(self, tmp_path):
        path = tmp_path / 'tiny.yaml'
        path.write_text("name: tiny\nlayout_grid: 1\nlayers:\n  m1: {connectivity: true}\nvias: {}\n")
        assert load_pdk(str(path)).name == 'tiny'

    def test_load_missing(self):
        with pytest.raises(FileNotFoundError):
            load_pdk('nope')
