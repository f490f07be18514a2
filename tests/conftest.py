"""Shared fixtures for the mapping engine tests."""

import pytest

from mappings.parsers.proguard import ProGuardParser


SAMPLE_MAPPINGS = """\
# This is a comment
net.minecraft.world.level.Level -> abc:
    int tickCount -> a
    net.minecraft.world.entity.Entity getEntity -> b
    1:1:void <init>() -> <init>
    3:7:int getTickCount() -> a
    9:22:void setEntity(net.minecraft.world.entity.Entity) -> a
net.minecraft.world.entity.Entity -> bcd:
    java.lang.String name -> a
    double posX -> b
    1:5:void tick() -> a
    7:12:java.lang.String getName() -> b
"""

ARRAY_MAPPINGS = """\
net.minecraft.Test -> xyz:
    int[] values -> a
    5:10:void process(int[],net.minecraft.Thing[]) -> b
net.minecraft.Thing -> qrs:
"""


@pytest.fixture
def parser():
    return ProGuardParser()


@pytest.fixture
def sample_text():
    return SAMPLE_MAPPINGS


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "client_mappings.txt"
    path.write_text(SAMPLE_MAPPINGS, encoding="utf-8")
    return path


@pytest.fixture
def array_file(tmp_path):
    path = tmp_path / "array_mappings.txt"
    path.write_text(ARRAY_MAPPINGS, encoding="utf-8")
    return path


@pytest.fixture
def array_text():
    return ARRAY_MAPPINGS
