"""
Step definitions for the wallpaper rotation feature.

Runs the real file pool provider against a temporary directory with a
recording wallpaper setter.
"""

from pathlib import Path

import pytest
from pytest_bdd import scenarios, given, when, then, parsers

from wallrotate.config import RotationConfig
from wallrotate.pool import FilePoolProvider
from wallrotate.scheduler import RotationScheduler

# Load all scenarios from the feature file
scenarios("../features/rotation.feature")


# ============================================================================
# Fixtures
# ============================================================================

class CountingProvider(FilePoolProvider):
    """FilePoolProvider that counts scans."""

    scans = 0

    def scan(self):
        self.scans += 1
        return super().scan()


@pytest.fixture
def rotation_context(tmp_path):
    """Context for rotation state."""
    return {
        "root": tmp_path,
        "paths": [],
        "pattern": "*",
        "shuffle": False,
        "monitors": [],
        "fail_on": set(),
        "calls": [],
        "scheduler": None,
        "provider": None,
        "result": None,
        "scans_before_round": 0,
    }


def split_names(text):
    return [n.strip() for n in text.split(",") if n.strip()]


# ============================================================================
# Given Steps
# ============================================================================

@given(parsers.parse('a directory containing "{files}"'))
def given_directory(rotation_context, files):
    """Create an image directory with the listed files."""
    directory = rotation_context["root"] / "images"
    directory.mkdir()
    for name in split_names(files):
        (directory / name).write_bytes(b"x")
    rotation_context["paths"].append(str(directory))


@given(parsers.parse('a rotation config with pattern "{pattern}" and shuffle off'))
def given_rotation_config(rotation_context, pattern):
    rotation_context["pattern"] = pattern
    rotation_context["shuffle"] = False


@given("a missing directory is also configured")
def given_missing_directory(rotation_context):
    rotation_context["paths"].insert(0, str(rotation_context["root"] / "missing"))


@given(parsers.parse('the monitors "{monitors}"'))
def given_monitors(rotation_context, monitors):
    rotation_context["monitors"] = split_names(monitors)


@given(parsers.parse('setting a wallpaper on "{monitor}" fails'))
def given_failing_monitor(rotation_context, monitor):
    rotation_context["fail_on"].add(monitor)


# ============================================================================
# When Steps
# ============================================================================

@when("the scheduler starts")
def when_scheduler_starts(rotation_context):
    config = RotationConfig.from_dict({
        "Interval": 1,
        "Paths": rotation_context["paths"],
        "Recursive": False,
        "Pattern": rotation_context["pattern"],
        "Shuffle": rotation_context["shuffle"],
    })
    provider = CountingProvider.from_config(config)

    class Setter:
        def set(self, monitor_id, image_path, index=0):
            rotation_context["calls"].append((monitor_id, image_path))
            if monitor_id in rotation_context["fail_on"]:
                raise OSError("unsupported format")

    monitors = rotation_context["monitors"]
    scheduler = RotationScheduler(config, provider, Setter(), lambda: monitors)
    scheduler.start()

    rotation_context["provider"] = provider
    rotation_context["scheduler"] = scheduler


@when("a round runs")
def when_round_runs(rotation_context):
    rotation_context["scans_before_round"] = rotation_context["provider"].scans
    rotation_context["result"] = rotation_context["scheduler"].tick()


# ============================================================================
# Then Steps
# ============================================================================

@then(parsers.parse('"{name}" is assigned to "{monitor}"'))
def then_assigned(rotation_context, name, monitor):
    assigned = [(m, Path(p).name) for m, p in rotation_context["result"].assigned]
    assert (monitor, name) in assigned, f"Expected {name} on {monitor}, got {assigned}"


@then(parsers.parse('the pool holds "{files}"'))
def then_pool_holds(rotation_context, files):
    pool = [Path(p).name for p in rotation_context["scheduler"].pool]
    assert pool == split_names(files)


@then("the pool is empty")
def then_pool_empty(rotation_context):
    assert rotation_context["scheduler"].pool == []


@then("the directory was rescanned")
def then_rescanned(rotation_context):
    assert rotation_context["result"].rescanned
    assert rotation_context["provider"].scans == rotation_context["scans_before_round"] + 1


@then(parsers.re(r"(?P<count>\d+) assignments? (?:is|are) attempted"), converters={"count": int})
def then_attempted(rotation_context, count):
    assert rotation_context["result"].attempted == count
