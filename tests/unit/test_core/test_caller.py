"""
test_caller.py - Caller context tracker tests

Checks:
- Innermost caller frame is the test, never engine code
- Class scopes follow their method scope
- Markers are attached to the exact scope they were registered on
- Helpers between the test and the engine are walked through
"""

from approvals.core.caller import capture, enclosing_scopes, is_own_module
from approvals.core.markers import ignore_line_endings, use_reporter
from approvals.domain.schemas import CustomReporterMarker, LineEndingMarker
from approvals.reporters.command_line import CommandLineReporter


def _helper_capture():
    return capture()


# =============================================================================
# enclosing_scopes / is_own_module
# =============================================================================

class TestEnclosingScopes:
    """Scope expansion of a code qualname."""

    def test_plain_function(self):
        assert list(enclosing_scopes("test_x")) == ["test_x"]

    def test_nested_classes(self):
        assert list(enclosing_scopes("TestA.Inner.test_x")) == [
            "TestA.Inner.test_x",
            "TestA.Inner",
            "TestA",
        ]

    def test_stops_at_function_boundary(self):
        """Classes defined inside a function do not expand past it."""
        assert list(enclosing_scopes("test_f.<locals>.Local.method")) == [
            "test_f.<locals>.Local.method",
            "test_f.<locals>.Local",
        ]


class TestIsOwnModule:

    def test_package_modules(self):
        assert is_own_module("approvals")
        assert is_own_module("approvals.core.approver")

    def test_similar_names_are_callers(self):
        assert not is_own_module("approvals_extra")
        assert not is_own_module("test_approvals")


# =============================================================================
# capture
# =============================================================================

class TestCapture:
    """capture() from inside tests."""

    def test_innermost_frame_is_this_test(self):
        ctx = capture()
        innermost = ctx.frames[0]
        assert innermost.function == "test_innermost_frame_is_this_test"
        assert innermost.qualname == "TestCapture.test_innermost_frame_is_this_test"
        assert innermost.filename == __file__

    def test_class_scope_follows_method(self):
        ctx = capture()
        assert ctx.frames[1].qualname == "TestCapture"
        assert ctx.frames[1].function == ""

    def test_no_engine_frames(self):
        ctx = capture()
        assert all(not is_own_module(frame.module) for frame in ctx)

    def test_walks_through_helpers(self):
        """A helper between test and engine is the innermost frame; the test follows."""
        ctx = capture()
        helper_ctx = _helper_capture()
        assert helper_ctx.frames[0].function == "_helper_capture"
        assert helper_ctx.frames[1].function == "test_walks_through_helpers"
        # The helper adds exactly one frame on top of the test's chain
        assert len(helper_ctx) == len(ctx) + 1

    def test_captures_every_outer_frame(self):
        """No cutoff: the chain reaches the outermost frame of the thread."""
        ctx = capture()
        assert len(ctx) > 3


@use_reporter(CommandLineReporter)
class TestMarkedClass:
    """Markers on the class and the method land on separate frames."""

    @ignore_line_endings(False)
    def test_markers_on_scopes(self):
        ctx = capture()
        method_frame, class_frame = ctx.frames[0], ctx.frames[1]

        line_marker = method_frame.marker(LineEndingMarker)
        assert line_marker == LineEndingMarker(normalize=False)
        assert method_frame.marker(CustomReporterMarker) is None

        reporter_marker = class_frame.marker(CustomReporterMarker)
        assert isinstance(reporter_marker.reporter, CommandLineReporter)
        assert class_frame.marker(LineEndingMarker) is None

    def test_first_marker_scans_outward(self):
        ctx = capture()
        assert ctx.first_marker(CustomReporterMarker) is not None
        assert ctx.first_marker(LineEndingMarker) is None
