from services.trigger_service import OneShotTrigger


def test_first_call_creates_marker_and_defers(tmp_path):
    marker = tmp_path / "state" / "nested" / "loader.initialized"
    trigger = OneShotTrigger(marker)

    assert trigger.should_run() is False
    assert marker.exists()
    assert marker.stat().st_size == 0


def test_second_call_proceeds(tmp_path):
    marker = tmp_path / "loader.initialized"

    assert OneShotTrigger(marker).should_run() is False
    assert OneShotTrigger(str(marker)).should_run() is True
    assert OneShotTrigger(marker).should_run() is True
    assert marker.exists()


def test_marker_content_is_irrelevant(tmp_path):
    marker = tmp_path / "loader.initialized"
    marker.write_text("anything")

    assert OneShotTrigger(marker).should_run() is True
