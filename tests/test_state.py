"""
Tests for the viewer state machine.
"""
from chart_viewer import state as viewer
from chart_viewer.colors import RandomColorSource
from chart_viewer.config import ViewerSettings
from chart_viewer.models import AxisMode, ChartType, Role
from chart_viewer.state import Phase

CSV = b"name,score,bonus\nA,10,1\nB,20,2"


def loaded(settings=None):
    return viewer.handle_upload(viewer.initial_state(settings), "scores.csv", CSV)


def configured():
    state = loaded()
    state = viewer.select_role(state, Role.X, "name", colors=RandomColorSource(1))
    return viewer.select_role(state, Role.Y, "score", colors=RandomColorSource(1))


class TestUpload:
    """Tests for upload events."""

    def test_initial_state_is_empty(self):
        state = viewer.initial_state()
        assert state.phase == Phase.EMPTY
        assert state.dataset is None
        assert state.chart_data is None

    def test_upload_loads_dataset(self):
        state = loaded()
        assert state.phase == Phase.LOADED
        assert state.dataset.columns == ("name", "score", "bonus")
        assert state.roles.is_empty
        assert state.message is None

    def test_unsupported_type_keeps_state(self):
        before = loaded()
        after = viewer.handle_upload(before, "picture.gif", b"GIF89a")
        assert after.dataset is before.dataset
        assert after.phase == Phase.LOADED
        assert "Unsupported file type" in after.message

    def test_parse_failure_keeps_last_good_state(self):
        before = configured()
        after = viewer.handle_upload(before, "broken.json", b"[{")
        assert after.dataset is before.dataset
        assert after.roles == before.roles
        assert after.chart_data is before.chart_data
        assert after.message.startswith("Failed to parse file")

    def test_new_upload_resets_roles(self):
        state = viewer.handle_upload(configured(), "other.csv", b"k,v\nx,1")
        assert state.phase == Phase.LOADED
        assert state.roles.is_empty
        assert state.chart_data is None
        assert state.dataset.columns == ("k", "v")

    def test_preview_setting_truncates(self):
        content = b"i\n" + b"\n".join(str(i).encode() for i in range(20))
        state = viewer.handle_upload(
            viewer.initial_state(ViewerSettings(preview_limit=10)), "rows.csv", content
        )
        assert len(state.dataset) == 10
        assert state.dataset.truncated

    def test_dismiss_message(self):
        state = viewer.handle_upload(viewer.initial_state(), "x.bin", b"")
        assert state.message
        assert viewer.dismiss_message(state).message is None


class TestRoleEvents:
    """Tests for role and chart-type events."""

    def test_configured_when_ready(self):
        state = configured()
        assert state.phase == Phase.CONFIGURED
        assert state.chart_data.labels == ["A", "B"]

    def test_not_ready_stays_loaded(self):
        state = viewer.select_role(loaded(), Role.X, "name")
        assert state.phase == Phase.LOADED
        assert state.chart_data is None

    def test_render_then_edit_recomputes(self):
        state = viewer.mark_rendered(configured())
        assert state.phase == Phase.RENDERED

        state = viewer.set_y(state, ["score", "bonus"], colors=RandomColorSource(2))
        assert state.phase == Phase.RENDERED
        assert [s.name for s in state.chart_data.series] == ["score", "bonus"]

    def test_configured_edit_keeps_phase(self):
        state = viewer.set_y(configured(), ["score", "bonus"], colors=RandomColorSource(2))
        assert state.phase == Phase.CONFIGURED

    def test_rendered_edit_to_incomplete_roles(self):
        state = viewer.mark_rendered(configured())
        state = viewer.set_y(state, [])
        assert state.phase == Phase.LOADED
        assert state.chart_data is None

    def test_mark_rendered_needs_chart_data(self):
        state = loaded()
        assert viewer.mark_rendered(state) is state

    def test_chart_type_change_resets_roles(self):
        state = viewer.change_chart_type(viewer.mark_rendered(configured()), ChartType.PIE)
        assert state.chart_type == ChartType.PIE
        assert state.roles.is_empty
        assert state.chart_data is None
        assert state.phase == Phase.LOADED

    def test_disabled_role_is_ignored(self):
        state = viewer.change_chart_type(loaded(), ChartType.DOUGHNUT)
        state = viewer.select_role(state, Role.X, "name")
        assert state.roles.x is None
        state = viewer.select_role(state, Role.Y, "score")
        assert state.phase == Phase.CONFIGURED
        assert state.chart_data.labels == ["Item 1", "Item 2"]

    def test_mode_change(self):
        state = viewer.select_role(loaded(), Role.X, "name")
        assert state.chart_data is None
        state = viewer.change_mode(state, AxisMode.SCALED)
        assert state.phase == Phase.CONFIGURED
        assert state.chart_data.series[0].name == "count"

    def test_shared_axes_setting(self):
        state = loaded(ViewerSettings(exclusive_axes=False))
        state = viewer.select_role(state, Role.X, "score")
        state = viewer.select_role(state, Role.Y, "score")
        assert state.roles.y == ("score",)

    def test_change_settings(self):
        state = viewer.change_settings(configured(), ViewerSettings(seed=3))
        assert state.settings.seed == 3
        assert state.phase == Phase.CONFIGURED
