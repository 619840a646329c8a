import copy
import logging

import pytest

from mockproxy import (
    CallTreeWarning,
    InvalidCallbackError,
    MissingDefinitionError,
    MockProxy,
    ProxyConfig,
    get,
    invoke,
    set_at,
    tree_of,
)
from mockproxy.config import STRICT_ENV_VAR


def test_end_to_end_chain(recorder, calls):
    save = recorder("save", result="saved")
    proxy = MockProxy({"user": {"create": {"save": save}}})
    assert get(proxy, "user.create.save") is save
    assert proxy.user.create.save("x", force=True) == "saved"
    assert calls == [("save", ("x",), {"force": True})]


def test_method_call_spelling_of_chain(recorder, calls):
    email = object()
    proxy = MockProxy(
        {"generate_email": {"validate": {"send": recorder("send", result=email)}}}
    )
    assert proxy.generate_email("ignored").validate().send(to="a@b.c") is email
    assert calls == [("send", (), {"to": "a@b.c"})]


def test_callback_invoked_once_per_call(recorder, calls):
    proxy = MockProxy({"ping": recorder("ping", result="pong")})
    assert proxy.ping() == "pong"
    assert proxy.ping(1) == "pong"
    assert calls == [("ping", (), {}), ("ping", (1,), {})]


def test_attribute_access_alone_does_not_invoke(recorder, calls):
    proxy = MockProxy({"ping": recorder("ping")})
    callback = proxy.ping
    assert calls == []
    callback()
    assert len(calls) == 1


def test_subtree_returns_new_child_each_time(recorder):
    proxy = MockProxy({"a": {"b": recorder("b", result=1)}})
    first, second = proxy.a, proxy.a
    assert isinstance(first, MockProxy)
    assert first is not proxy
    assert first is not second
    assert first.b() == 1
    assert tree_of(first) is tree_of(proxy)["a"]


def test_calling_proxy_returns_itself():
    proxy = MockProxy({})
    assert proxy(1, 2, key="value") is proxy


@pytest.mark.parametrize("name", ["missing", "user", "save"])
def test_missing_definition(name):
    proxy = MockProxy({"other": lambda: None, "nested": {"user": lambda: None}})
    with pytest.raises(MissingDefinitionError) as err:
        getattr(proxy, name)
    assert err.value.method_name == name
    assert f"Missing method {name!r}" in str(err.value)
    assert err.value.tree is tree_of(proxy)


def test_missing_definition_is_attribute_error():
    proxy = MockProxy({"a": lambda: None})
    assert hasattr(proxy, "a")
    assert not hasattr(proxy, "b")
    assert getattr(proxy, "b", "default") == "default"


def test_missing_definition_logged(caplog: pytest.LogCaptureFixture):
    proxy = MockProxy({})
    with caplog.at_level(logging.DEBUG, logger="mockproxy.proxy"):
        with pytest.raises(MissingDefinitionError):
            proxy.nope()
    assert "No definition for method 'nope'" in caplog.text


def test_dispatch_is_single_segment():
    proxy = MockProxy({"a": {"b": lambda: None}})
    with pytest.raises(MissingDefinitionError):
        getattr(proxy, "a.b")


def test_dunder_names_bypass_tree():
    proxy = MockProxy({"__len__": lambda: 3, "__custom__": lambda: 1})
    with pytest.raises(AttributeError) as err:
        proxy.__custom__
    assert not isinstance(err.value, MissingDefinitionError)
    with pytest.raises(TypeError):
        len(proxy)  # type: ignore[arg-type]


def test_invoke_explicit_form(recorder, calls):
    proxy = MockProxy({"validate!": recorder("validate!", result=True), "__x__": {}})
    assert invoke(proxy, "validate!", 1, strict=True) is True
    assert calls == [("validate!", (1,), {"strict": True})]
    child = invoke(proxy, "__x__", "ignored")
    assert isinstance(child, MockProxy)
    with pytest.raises(MissingDefinitionError):
        invoke(proxy, "nope")


def test_proxy_rejects_attribute_writes():
    proxy = MockProxy({"a": lambda: 1})
    with pytest.raises(AttributeError, match="use set_at or merge"):
        proxy.a = lambda: 2
    with pytest.raises(AttributeError):
        del proxy.a
    assert proxy.a() == 1


def test_snapshots_survive_later_writes():
    proxy = MockProxy({"a": {"b": lambda: "old"}})
    child = proxy.a
    old_callback = proxy.a.b
    set_at(proxy, "a.b", lambda: "new")
    assert child.b() == "old"
    assert old_callback() == "old"
    assert proxy.a.b() == "new"


def test_proxy_as_leaf_is_returned_when_called():
    inner = MockProxy({"decorate": lambda text: f"*{text}*"})
    proxy = MockProxy({"generator": inner})
    assert proxy.generator() is inner
    assert proxy.generator().decorate("hi") == "*hi*"


def test_callback_returning_proxy():
    generator = MockProxy({"validate": {"send": lambda to: to}})
    proxy = MockProxy({"generate_email": lambda kind: generator})
    assert proxy.generate_email("welcome").validate().send("me") == "me"


def test_construction_warns_on_invalid_leaf():
    with pytest.warns(CallTreeWarning):
        proxy = MockProxy({"a": "not callable"})
    with pytest.raises(TypeError):
        proxy.a()


def test_strict_config_rejects_invalid_leaf():
    with pytest.raises(InvalidCallbackError):
        MockProxy({"a": {"b": 1}}, config=ProxyConfig(strict=True))


def test_strict_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(STRICT_ENV_VAR, "true")
    with pytest.raises(InvalidCallbackError):
        MockProxy({"a": None})


def test_children_inherit_config():
    config = ProxyConfig(strict=True)
    proxy = MockProxy({"a": {"b": lambda: None}}, config=config)
    assert proxy.a._mockproxy_config is config


def test_construct_requires_mapping():
    with pytest.raises(TypeError):
        MockProxy(["a"])  # type: ignore[arg-type]


def test_repr():
    assert repr(MockProxy({"a": {}})) == "MockProxy({'a': {}})"


def test_copy_is_an_independent_handle():
    proxy = MockProxy({"a": lambda: 1})
    duplicate = copy.copy(proxy)
    assert duplicate is not proxy
    assert tree_of(duplicate) is tree_of(proxy)
    set_at(duplicate, "a", lambda: 2)
    assert duplicate.a() == 2
    assert proxy.a() == 1


async def test_async_callback():
    async def fetch(key):
        return f"value-{key}"

    proxy = MockProxy({"store": {"fetch": fetch}})
    assert await proxy.store.fetch(1) == "value-1"
