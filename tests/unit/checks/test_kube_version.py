import pytest

from preflight.exceptions import CommandExitError, CommandLaunchError
from preflight.models import VersionStatus
from preflight.version import (
    REGEX_VERSION_MAJOR,
    REGEX_VERSION_MINOR,
    check_version,
    extract_version,
    verify_kube_version,
    version_match,
)

CLIENT_121 = ('Client Version: version.Info{Major:"1", Minor:"21", GitVersion:"v1.21.3", '
              'GitCommit:"ca643a4d1f7bfe34773c74f79527be4afd95bf39", GoVersion:"go1.16.6", '
              'Compiler:"gc", Platform:"linux/amd64"}')
SERVER_121 = ('Server Version: version.Info{Major:"1", Minor:"21", GitVersion:"v1.21.2", '
              'GitCommit:"092fbfbf53427de67cac1e9fa54aaa09a28371d7", GoVersion:"go1.16.5", '
              'Compiler:"gc", Platform:"linux/amd64"}')
BOTH_121 = CLIENT_121 + "\n" + SERVER_121 + "\n"


class TestVersionMatch:

    def test_first_digit_run(self):
        assert version_match(REGEX_VERSION_MAJOR, 'Major:"1", Minor:"21"') == "1"
        assert version_match(REGEX_VERSION_MINOR, 'Major:"1", Minor:"21"') == "21"

    def test_no_match(self):
        assert version_match(REGEX_VERSION_MAJOR, "nothing here") == ""

    def test_non_digit_value_does_not_match(self):
        assert version_match(REGEX_VERSION_MINOR, 'Minor:"21+"') == ""


class TestExtractVersion:

    def test_subjects_extracted_independently(self):
        output = CLIENT_121 + "\n" + SERVER_121.replace('Minor:"21"', 'Minor:"20"')
        assert extract_version("Client", output) == ("1", "21")
        assert extract_version("Server", output) == ("1", "20")

    def test_field_order_is_irrelevant(self):
        output = 'Client Version: version.Info{GitVersion:"v1.19.0", Minor:"19", Major:"1"}'
        assert extract_version("Client", output) == ("1", "19")

    def test_missing_subject(self):
        assert extract_version("Server", CLIENT_121) == ("", "")

    def test_fields_outside_fragment_ignored(self):
        output = 'Server Version: unknown\nMajor:"1" Minor:"21"'
        assert extract_version("Server", output) == ("", "")


class TestCheckVersion:

    def test_match_is_silent(self):
        result, message = check_version("Client", CLIENT_121, "1", "21")
        assert message == ""
        assert result.status == VersionStatus.MATCH
        assert (result.major, result.minor) == ("1", "21")

    def test_minor_mismatch(self):
        result, message = check_version("Client", CLIENT_121, "1", "20")
        assert message == "Unexpected Client version 1.21"
        assert result.status == VersionStatus.MISMATCH

    def test_major_mismatch(self):
        _, message = check_version("Client", CLIENT_121, "2", "21")
        assert message == "Unexpected Client version 1.21"

    def test_comparison_is_string_equality(self):
        output = 'Client Version: version.Info{Major:"1", Minor:"09"}'
        result, message = check_version("Client", output, "1", "9")
        assert result.status == VersionStatus.MISMATCH
        assert message == "Unexpected Client version 1.09"

    def test_not_found_includes_raw_output(self):
        result, message = check_version("Server", CLIENT_121, "1", "21")
        assert result.status == VersionStatus.NOT_FOUND
        assert message == f"Couldn't find Server version from kubectl output '{CLIENT_121}'"


class TestVerifyKubeVersion:

    def test_both_match_is_silent(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"kubectl"}, output=BOTH_121)

        report = verify_kube_version("1", "21", runner=runner, reporter=reporter)

        assert report.ok
        assert reporter.text == ""
        assert set(report.subjects) == {"Client", "Server"}

    def test_runs_version_with_combined_output(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"kubectl"}, output=BOTH_121)

        verify_kube_version("1", "21", runner=runner, reporter=reporter)

        assert runner.calls == [(["kubectl", "version"], True)]

    def test_custom_tool_and_args(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"oc"}, output=BOTH_121)

        verify_kube_version("1", "21", runner=runner, reporter=reporter,
                            kubectl_tool="oc", version_args=["version", "--short=false"])

        assert runner.calls == [(["oc", "version", "--short=false"], True)]

    def test_unexpected_client_version(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"kubectl"}, output=BOTH_121)

        report = verify_kube_version("1", "20", runner=runner, reporter=reporter)

        client_lines = [l for l in reporter.lines if "Client" in l]
        assert client_lines == ["[WARN] Unexpected Client version 1.21"]
        assert report.subjects["Client"].status == VersionStatus.MISMATCH
        assert report.subjects["Server"].status == VersionStatus.MISMATCH
        assert not report.ok

    def test_missing_server_section(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"kubectl"}, output=CLIENT_121 + "\n")

        report = verify_kube_version("1", "21", runner=runner, reporter=reporter)

        assert len(reporter.lines) == 1
        assert "Couldn't find Server version" in reporter.lines[0]
        assert CLIENT_121 in reporter.text
        server = report.subjects["Server"]
        assert server.status == VersionStatus.NOT_FOUND
        assert (server.major, server.minor) == ("", "")
        assert report.subjects["Client"].status == VersionStatus.MATCH

    def test_tool_not_resolvable(self, fake_runner, reporter):
        runner = fake_runner(resolvable=())

        report = verify_kube_version("1", "21", runner=runner, reporter=reporter)

        assert reporter.lines == ["[WARN] Kubernetes version check skipped"]
        assert runner.calls == []
        assert report.skipped
        assert not report.ok

    @pytest.mark.parametrize("error", [
        CommandExitError(["kubectl", "version"], 1, "connection refused"),
        CommandLaunchError(["kubectl", "version"], PermissionError("denied")),
    ])
    def test_invocation_failure(self, fake_runner, reporter, error):
        runner = fake_runner(resolvable={"kubectl"}, output=BOTH_121, error=error)

        report = verify_kube_version("1", "21", runner=runner, reporter=reporter)

        assert len(reporter.lines) == 1
        assert reporter.lines[0].startswith("[WARN] Kubernetes version check skipped with error")
        assert str(error) in reporter.lines[0]
        assert report.skipped
        assert report.error is error
        assert report.subjects == {}

    def test_idempotent(self, fake_runner, reporter):
        runner = fake_runner(resolvable={"kubectl"}, output=BOTH_121)

        first = verify_kube_version("1", "20", runner=runner, reporter=reporter)
        second = verify_kube_version("1", "20", runner=runner, reporter=reporter)

        assert first == second
        assert reporter.lines[:2] == reporter.lines[2:]
