import io
import os
import shlex
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from app_config.errors import (
    CommandFailedError,
    DeserializeError,
    HookIOError,
    InvalidSectionError,
    ParameterNotFoundError,
    RenderError,
)
from app_config.hooks import (
    CommandHook,
    CommandSettings,
    FileHook,
    FileSettings,
    RawHook,
    RawSettings,
    TemplateHook,
    TemplateSettings,
)

FIXTURES = Path(__file__).parent / "fixtures"

EXPECTED_PEERS = """
[Peer]
EndPoint = host1
PublicKey = xyz

[Peer]
EndPoint = host2
PublicKey = abc

"""


class HookTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)


class RawHookTests(unittest.TestCase):
    def test_prints_payload_with_newline(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            RawSettings().build().run("Where am I")
        self.assertEqual(out.getvalue(), "Where am I\n")

    def test_settings_build_raw_hook(self) -> None:
        self.assertEqual(RawSettings.model_validate({}).build(), RawHook())


class FileHookTests(HookTestCase):
    def test_writes_payload_verbatim(self) -> None:
        target = self.tmp / "raw_output.txt"
        payload = "line one\r\nline two\n"
        FileHook(outfile=str(target)).run(payload)
        self.assertEqual(target.read_bytes(), payload.encode("utf-8"))

    def test_overwrites_existing_file(self) -> None:
        target = self.tmp / "raw_output.txt"
        target.write_text("a much longer previous content", encoding="utf-8")
        FileHook(outfile=str(target)).run("short")
        self.assertEqual(target.read_text(encoding="utf-8"), "short")

    def test_expands_home_directory(self) -> None:
        hook = FileSettings(outfile="~/somefile.txt").build()
        self.assertEqual(hook, FileHook(outfile=os.path.expanduser("~/somefile.txt")))

    def test_unwritable_target_is_io_error(self) -> None:
        hook = FileHook(outfile=str(self.tmp / "no" / "such" / "dir" / "out.txt"))
        with self.assertRaises(HookIOError):
            hook.run("data")


class CommandHookTests(HookTestCase):
    def test_plain_command_succeeds(self) -> None:
        CommandHook(command="echo hello").run("")

    def test_nonexistent_executable_fails_with_command(self) -> None:
        with self.assertRaises(CommandFailedError) as ctx:
            CommandHook(command="/not/a/command").run("")
        self.assertEqual(ctx.exception.command, "/not/a/command")
        self.assertNotEqual(ctx.exception.status, 0)
        self.assertIn("Failed to execute cmd: /not/a/command", str(ctx.exception))

    def test_piped_payload_reaches_stdin(self) -> None:
        target = self.tmp / "out.txt"
        CommandHook(command=f"cat > {shlex.quote(str(target))}", pipe_data=True).run("X")
        self.assertEqual(target.read_text(encoding="utf-8"), "X")

    def test_large_piped_payload(self) -> None:
        target = self.tmp / "big.txt"
        payload = "0123456789abcdef" * 65536
        CommandHook(command=f"cat > {shlex.quote(str(target))}", pipe_data=True).run(payload)
        self.assertEqual(target.stat().st_size, len(payload))

    def test_piped_command_exit_status_is_checked(self) -> None:
        with self.assertRaises(CommandFailedError) as ctx:
            CommandHook(command="cat > /dev/null; exit 3", pipe_data=True).run("data")
        self.assertEqual(ctx.exception.status, 3)

    def test_command_that_ignores_stdin(self) -> None:
        CommandHook(command="true", pipe_data=True).run("data" * 100000)

    def test_missing_shell_is_io_error(self) -> None:
        with self.assertRaises(HookIOError):
            CommandHook(command="echo hi", shell=str(self.tmp / "no-shell")).run("")

    def test_settings_default_to_no_piping(self) -> None:
        hook = CommandSettings.model_validate({"command": "cat > booyeah.txt"}).build()
        self.assertEqual(hook, CommandHook(command="cat > booyeah.txt", pipe_data=False))


class TemplateHookTests(HookTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.body = (FIXTURES / "wireguard.tmpl").read_text(encoding="utf-8")

    def hook(self, source_type: str, **kwargs) -> TemplateHook:
        return TemplateHook(body=self.body, source_type=source_type, **kwargs)

    def test_yaml_json_and_toml_render_identically(self) -> None:
        for source_type in ("yaml", "json", "toml"):
            with self.subTest(source_type=source_type):
                payload = (FIXTURES / f"hosts.{source_type}").read_text(encoding="utf-8")
                self.assertEqual(self.hook(source_type).render(payload), EXPECTED_PEERS)

    def test_writes_to_out_file(self) -> None:
        target = self.tmp / "rendered.txt"
        payload = (FIXTURES / "hosts.yaml").read_text(encoding="utf-8")
        self.hook("yaml", out_file=str(target)).run(payload)
        self.assertEqual(target.read_text(encoding="utf-8"), EXPECTED_PEERS)

    def test_prints_to_stdout_without_out_file(self) -> None:
        out = io.StringIO()
        payload = (FIXTURES / "hosts.json").read_text(encoding="utf-8")
        with redirect_stdout(out):
            self.hook("json").run(payload)
        self.assertEqual(out.getvalue(), EXPECTED_PEERS)

    def test_malformed_payload_is_deserialize_error(self) -> None:
        with self.assertRaises(DeserializeError):
            self.hook("json").run("{not json")
        with self.assertRaises(DeserializeError):
            self.hook("toml").run("[hosts")
        with self.assertRaises(DeserializeError):
            self.hook("yaml").run("hosts: [unclosed")

    def test_key_helper_inlines_parameter(self) -> None:
        params = {"Hello": "World"}
        hook = TemplateHook(body='Greetings: {{ key("Hello") }}', source_type="yaml", lookup=params.__getitem__)
        self.assertEqual(hook.render("{}"), "Greetings: World")

    def test_key_helper_failure_is_render_error(self) -> None:
        def lookup(key: str) -> str:
            raise ParameterNotFoundError(key)

        hook = TemplateHook(body='{{ key("Missing") }}', source_type="yaml", lookup=lookup)
        with self.assertRaises(RenderError):
            hook.render("{}")

    def test_payload_field_named_key_does_not_hide_helper(self) -> None:
        params = {"x": "from store"}
        hook = TemplateHook(body='{{ key("x") }}', source_type="yaml", lookup=params.__getitem__)
        self.assertEqual(hook.render("key: abc\n"), "from store")

    def test_expression_errors_are_render_errors(self) -> None:
        cases = [
            ("{{ hosts + 1 }}", "hosts: [a]\n"),
            ("{{ 1 / zero }}", "zero: 0\n"),
            ("{{ word.upper(1) }}", "word: abc\n"),
        ]
        for body, payload in cases:
            with self.subTest(body=body):
                with self.assertRaises(RenderError):
                    TemplateHook(body=body, source_type="yaml").run(payload)

    def test_non_mapping_payload_is_exposed_as_data(self) -> None:
        hook = TemplateHook(body="{{ data | join(',') }}", source_type="json")
        self.assertEqual(hook.render('["a", "b"]'), "a,b")

    def test_settings_load_template_file(self) -> None:
        settings = TemplateSettings(file=str(FIXTURES / "wireguard.tmpl"), source_type="yaml", out_file="~/peers.conf")
        hook = settings.build()
        self.assertEqual(hook.body, self.body)
        self.assertEqual(hook.source_type, "yaml")
        self.assertEqual(hook.out_file, os.path.expanduser("~/peers.conf"))

    def test_settings_reject_template_syntax_errors(self) -> None:
        path = self.tmp / "broken.tmpl"
        path.write_text("{% for host in hosts %}{{ host.name }}", encoding="utf-8")
        with self.assertRaises(InvalidSectionError) as ctx:
            TemplateSettings(file=str(path), source_type="yaml").build()
        self.assertEqual(ctx.exception.section, "template")

    def test_settings_reject_non_utf8_template(self) -> None:
        path = self.tmp / "latin1.tmpl"
        path.write_bytes("caf\xe9 {{ hosts }}".encode("latin-1"))
        with self.assertRaises(InvalidSectionError) as ctx:
            TemplateSettings(file=str(path), source_type="yaml").build()
        self.assertEqual(ctx.exception.section, "template")

    def test_settings_missing_template_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            TemplateSettings(file=str(self.tmp / "missing.tmpl"), source_type="yaml").build()


if __name__ == "__main__":
    unittest.main()
