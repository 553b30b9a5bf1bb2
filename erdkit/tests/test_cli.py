"""Tests for CLI interface."""

import json

from click.testing import CliRunner

from erdkit.cli import cli


def describe_parse_type_command():
    def prints_type_tree(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["parse-type", "List<tuple2<u32,bytes>>"])
        expect(result.exit_code) == 0
        expect("List<tuple<u32,bytes>>" in result.output) == True
        expect("numerical" in result.output) == True

    def prints_json_descriptor(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["parse-type", "--json", "tuple2<u32,bytes>"])
        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["name"]) == "tuple"
        expect(data["size"]) == 2
        expect([p["name"] for p in data["params"]]) == ["u32", "bytes"]

    def fails_on_malformed_expression(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["parse-type", "List<u8"])
        expect(result.exit_code) == 1

    def fails_on_unknown_type(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["parse-type", "Frob"])
        expect(result.exit_code) == 1


def describe_encode_command():
    def prints_call_data(expect, adder_abi_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "--abi", adder_abi_path, "-e", "add", "7"])
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "add@07"

    def prints_json(expect, adder_abi_path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["encode", "--abi", adder_abi_path, "-e", "add", "--json", "256"]
        )
        expect(result.exit_code) == 0
        expect(json.loads(result.output)) == {
            "endpoint": "add",
            "parts": ["0100"],
            "data": "add@0100",
        }

    def fails_on_bad_arguments(expect, adder_abi_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "--abi", adder_abi_path, "-e", "add", "-5"])
        expect(result.exit_code) == 1

    def fails_on_unknown_endpoint(expect, adder_abi_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "--abi", adder_abi_path, "-e", "nope"])
        expect(result.exit_code) == 1


def describe_decode_command():
    def prints_values(expect, adder_abi_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "--abi", adder_abi_path, "-e", "getSum", "05"])
        expect(result.exit_code) == 0
        expect(json.loads(result.output)) == [5]


def describe_main_group():
    def shows_help(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        expect("parse-type" in result.output) == True
        expect("encode" in result.output) == True
