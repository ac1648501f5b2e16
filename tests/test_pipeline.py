from __future__ import annotations

import pytest

from hostprep.config import ProvisionConfig
from hostprep.context import ProvisionCtx
from hostprep.lib.privilege import Privilege
from hostprep.models import ProvisioningTarget
from hostprep.pipeline import StageFailed, run_pipeline
from hostprep.profiles import load_profile


class Record:
    def __init__(self, step_id, fail=False):
        self.step_id = step_id
        self.fail = fail

    def run(self, ctx, state):
        if self.fail:
            raise RuntimeError("boom")
        state.setdefault("seen", []).append(self.step_id)
        return state


@pytest.fixture
def ctx():
    cfg = ProvisionConfig()
    profile = load_profile("gophish")
    return ProvisionCtx(
        cfg=cfg,
        profile=profile,
        target=ProvisioningTarget("example.cam", "203.0.113.10"),
        artifact=profile.resolve_artifact(cfg),
        privilege=Privilege(is_root=True),
    )


def test_runs_in_order(ctx):
    result = run_pipeline(ctx=ctx, steps=[Record("a"), Record("b"), Record("c")])

    assert result.ran_steps == ["a", "b", "c"]
    assert result.state["seen"] == ["a", "b", "c"]
    assert result.state["current_step"] is None


def test_first_failure_halts_and_names_the_stage(ctx):
    state = {}
    with pytest.raises(StageFailed) as exc:
        run_pipeline(ctx=ctx, steps=[Record("a"), Record("b", fail=True), Record("c")], state=state)

    assert exc.value.step_id == "b"
    assert str(exc.value) == "Stage b failed: boom"
    assert isinstance(exc.value.cause, RuntimeError)
    assert state["seen"] == ["a"]
    assert state["current_step"] == "b"


def test_stop_after(ctx):
    result = run_pipeline(ctx=ctx, steps=[Record("a"), Record("b"), Record("c")], stop_after="b")

    assert result.ran_steps == ["a", "b"]
