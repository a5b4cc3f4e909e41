import pytest

from applinkverify.service_config import (
    RDB_NAME,
    RDB_TABLE_NAME,
    RDB_VERSION,
    SERVICE_PATH,
    AgentInterfaceCode,
    MgrInterfaceCode,
    RdbConfig,
    RdbDataItem,
    ScopeGuard,
)


def test_agent_interface_codes():
    assert AgentInterfaceCode.SINGLE_VERIFY == 0
    assert AgentInterfaceCode(1) is AgentInterfaceCode.CONVERT_TO_EXPLICIT_WANT


def test_mgr_interface_codes_are_consecutive():
    values = [code.value for code in MgrInterfaceCode]
    assert values == list(range(len(values)))
    assert MgrInterfaceCode.GET_DEFERRED_LINK == 11
    assert MgrInterfaceCode(5) is MgrInterfaceCode.SAVE_VERIFY_STATUS


def test_rdb_config_defaults():
    config = RdbConfig()
    assert config.db_path == "/data/service/el1/public/app_domain_verify_mgr_service"
    assert config.version == 3
    assert config.db_name == ""


def test_database_file_joins_path_and_name():
    config = RdbConfig(db_name=RDB_NAME, table_name=RDB_TABLE_NAME)
    assert config.database_file() == SERVICE_PATH + "/advdb.db"
    assert config.table_name == "verified_domain"
    assert config.version == RDB_VERSION


def test_database_file_custom_path():
    config = RdbConfig(db_path="/tmp/x", db_name="/y.db")
    assert config.database_file() == "/tmp/x/y.db"


def test_rdb_data_item_defaults():
    item = RdbDataItem(bundle_name="a", domain="https://")
    assert item.status == 0
    assert item.count == 0
    assert item.verify_ts == ""
    assert item == RdbDataItem(bundle_name="a", domain="https://")


def test_scope_guard_runs_on_exit():
    calls = []
    with ScopeGuard(lambda: calls.append("done")) as guard:
        assert calls == []
    assert calls == ["done"]
    assert guard.dismissed is False


def test_scope_guard_dismissed_does_not_run():
    calls = []
    with ScopeGuard(lambda: calls.append("done")) as guard:
        guard.dismiss()
    assert calls == []
    assert guard.dismissed is True


def test_scope_guard_runs_on_exception_and_propagates():
    calls = []
    with pytest.raises(RuntimeError):
        with ScopeGuard(lambda: calls.append("done")):
            raise RuntimeError("boom")
    assert calls == ["done"]


def test_scope_guard_enter_returns_self():
    guard = ScopeGuard(lambda: None)
    assert guard.__enter__() is guard