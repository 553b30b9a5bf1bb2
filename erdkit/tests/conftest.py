"""Unit tests configuration file."""

import os

import pytest

from erdkit.abi import AbiRegistry

TESTDATA_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "testdata")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def adder_abi_path():
    return os.path.join(TESTDATA_DIR, "adder.abi.json")


@pytest.fixture
def adder_abi(adder_abi_path):
    return AbiRegistry.load(adder_abi_path)


@pytest.fixture
def registry_abi():
    return AbiRegistry.load(os.path.join(TESTDATA_DIR, "registry.abi.json"))


@pytest.fixture
def make_endpoint():
    """Build the definition of an endpoint named ``test`` with the given input types."""

    def build(*types):
        abi = AbiRegistry.from_dict(
            {
                "endpoints": [
                    {
                        "name": "test",
                        "inputs": [{"name": f"arg{i}", "type": t} for i, t in enumerate(types)],
                        "outputs": [],
                    }
                ]
            }
        )
        return abi.get_endpoint("test")

    return build
