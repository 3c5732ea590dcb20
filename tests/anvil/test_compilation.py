"""Tests for the shared build compilation and its hooks."""

from anvil.compilation import BuildCompilation, Hook


class TestHook:

    def test_calls_taps_in_order(self):
        hook = Hook("example")
        calls = []
        hook.tap("first", lambda v: calls.append(("first", v)))
        hook.tap("second", lambda v: calls.append(("second", v)))

        hook.call(7)

        assert calls == [("first", 7), ("second", 7)]
        assert hook.taps == ["first", "second"]

    def test_call_without_taps(self):
        Hook("empty").call()


class TestBuildCompilation:

    def test_load_action_configuration_resets_store(self):
        compilation = BuildCompilation()
        compilation.action_configuration["clean"] = {"stale": True}
        compilation.hooks.load_action_configuration.tap(
            "writer",
            lambda action: compilation.action_configuration[action].update(fresh=True),
        )

        result = compilation.load_action_configuration("clean")

        assert result == {"fresh": True}

    def test_run_clean_passes_clean_configuration(self):
        compilation = BuildCompilation()
        received = []
        compilation.hooks.load_action_configuration.tap(
            "writer",
            lambda action: compilation.action_configuration[action].update(action=action),
        )
        compilation.hooks.clean.tap("cleaner", received.append)

        compilation.run_clean()

        assert received == [{"action": "clean"}]

    def test_run_build(self):
        compilation = BuildCompilation()
        received = []
        compilation.hooks.build.tap("builder", received.append)
        compilation.run_build()
        assert received == [{}]
