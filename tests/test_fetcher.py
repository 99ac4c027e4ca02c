import threading

import pytest
import requests

from barometer.fetcher import (
    EMPTY_ERROR_MSG,
    PARSE_ERROR_MSG,
    DashboardState,
    FailureKind,
    FetchStatus,
    fetch_observations,
    recover,
)

ROWS = [
    {"id": 1, "nuts1": "AT13", "districtCode": 91900, "refYear": 1872, "refDate": 187205,
     "p": "990.9", "p_max": "1003.2", "p_min": "981.2"},
    {"id": 2, "nuts1": "AT13", "districtCode": 91900, "refYear": 1872, "refDate": 187206,
     "p": "1000", "p_max": None, "p_min": None},
]


def test_fetch_array_success(fake_session):
    s = fake_session(payload=ROWS)
    res = fetch_observations("http://backend", session=s, timeout=3)
    assert res.ok
    assert len(res.records) == 2
    assert res.records[1].pressure_max == 1080.0
    assert res.records[1].display_label == "1872-06"
    # exactly one JSON request
    s.get.assert_called_once_with("http://backend", headers={"Accept": "application/json"}, timeout=3)

def test_fetch_single_object_body(fake_session):
    res = fetch_observations("http://backend", session=fake_session(payload={"nuts1": "DE1", "p": "1005.3"}))
    assert res.ok
    assert len(res.records) == 1
    r = res.records[0]
    assert r.region == "DE1"
    assert r.pressure_avg == 1005.3
    assert r.pressure_max > 0 and r.pressure_min > 0

def test_http_error_status(fake_session):
    res = fetch_observations("http://backend", session=fake_session(status_code=500))
    assert not res.ok
    assert res.failure.kind == FailureKind.HTTP_STATUS
    assert "500" in res.failure.message

def test_invalid_json(fake_session):
    res = fetch_observations("http://backend", session=fake_session(json_error=True))
    assert res.failure.kind == FailureKind.PARSE
    assert res.failure.message == PARSE_ERROR_MSG

def test_empty_array(fake_session):
    res = fetch_observations("http://backend", session=fake_session(payload=[]))
    assert res.failure.kind == FailureKind.EMPTY
    assert res.failure.message == EMPTY_ERROR_MSG

def test_only_unusable_items_is_empty(fake_session):
    res = fetch_observations("http://backend", session=fake_session(payload=[None, "x", 3]))
    assert res.failure.kind == FailureKind.EMPTY

def test_transport_error(fake_session):
    s = fake_session(exc=requests.ConnectionError("connection refused"))
    res = fetch_observations("http://backend", session=s)
    assert res.failure.kind == FailureKind.TRANSPORT
    assert "connection refused" in res.failure.message

def test_timeout_is_a_transport_error(fake_session):
    res = fetch_observations("http://backend", session=fake_session(exc=requests.Timeout("read timed out")))
    assert res.failure.kind == FailureKind.TRANSPORT


# --- recovery step ---

def test_recover_success_keeps_records(fake_session):
    res = fetch_observations("http://backend", session=fake_session(payload=ROWS))
    data = recover(res)
    assert data.error is None
    assert data.records == res.records
    assert data.stats.total_records == 2

def test_recover_failure_uses_sample_data(fake_session):
    res = fetch_observations("http://backend", session=fake_session(status_code=500))
    data = recover(res)
    assert len(data.records) == 1
    assert data.records[0].region == "AT13"
    assert data.records[0].display_label == "1872-05"
    assert data.stats.avg_pressure == "990.9"
    assert data.error == res.failure.message


# --- state holder ---

def test_state_starts_idle():
    st = DashboardState(backend_url="http://backend", session=requests.Session())
    snap = st.snapshot()
    assert snap.status == FetchStatus.IDLE
    assert snap.records == ()
    assert snap.stats.total_records == 0
    assert snap.error is None
    assert not snap.loading

def test_trigger_success(fake_session):
    st = DashboardState(backend_url="http://backend", session=fake_session(payload=ROWS))
    snap = st.trigger_fetch()
    assert snap.status == FetchStatus.SUCCESS
    assert snap.error is None
    assert len(snap.records) == 2
    assert snap.stats.total_records == 2
    assert st.snapshot() is snap

def test_trigger_http_500_falls_back_with_error(fake_session):
    st = DashboardState(backend_url="http://backend", session=fake_session(status_code=500))
    snap = st.trigger_fetch()
    assert snap.status == FetchStatus.FAILURE
    assert snap.records  # never empty
    assert snap.error and "500" in snap.error
    assert snap.stats.to_dict() == {
        "avgPressure": "990.9", "maxPressure": "1003.2", "minPressure": "981.2", "totalRecords": 1,
    }

def test_refresh_clears_previous_error(fake_session):
    s = fake_session(status_code=503)
    st = DashboardState(backend_url="http://backend", session=s)
    assert st.trigger_fetch().error

    ok = requests.Response()
    s.get.return_value = ok
    ok.status_code = 200
    ok._content = b'[{"NUTS": "AT13", "P": "995.0"}]'
    snap = st.trigger_fetch()
    assert snap.error is None
    assert snap.records[0].pressure_avg == 995.0

def test_backend_url_change_applies_to_next_trigger(fake_session):
    s = fake_session(payload=ROWS)
    st = DashboardState(backend_url="http://old", session=s)
    st.set_backend_url(" http://new:8080 ")
    snap = st.trigger_fetch()
    assert snap.backend_url == "http://new:8080"
    assert s.get.call_args.args[0] == "http://new:8080"

def test_blank_backend_url_rejected():
    st = DashboardState(backend_url="http://backend", session=requests.Session())
    with pytest.raises(ValueError):
        st.set_backend_url("  ")
    assert st.backend_url == "http://backend"

def test_overlapping_trigger_is_ignored(fake_session):
    s = fake_session(payload=ROWS)
    st = DashboardState(backend_url="http://backend", session=s)
    entered, release = threading.Event(), threading.Event()
    answer = s.get.return_value

    def slow_get(*args, **kwargs):
        entered.set()
        release.wait(5)
        return answer
    s.get.side_effect = slow_get

    t = threading.Thread(target=st.trigger_fetch)
    t.start()
    assert entered.wait(5)
    # first trigger still in flight
    snap = st.trigger_fetch()
    assert snap.loading
    release.set()
    t.join(5)

    assert s.get.call_count == 1
    assert st.snapshot().status == FetchStatus.SUCCESS

def test_oversized_date_code_still_resolves(fake_session):
    st = DashboardState(backend_url="http://backend",
                        session=fake_session(payload=[{"NUTS": "AT13", "REF_DATE": "9" * 5000, "P": "990.9"}]))
    snap = st.trigger_fetch()
    assert snap.status == FetchStatus.SUCCESS
    assert snap.records[0].ref_date == 0
    assert snap.records[0].display_label == "Unknown"

def test_pipeline_crash_falls_back_instead_of_staying_loading(fake_session):
    class _Broken:
        def normalize_all(self, raws):
            raise RuntimeError("boom")

    st = DashboardState(backend_url="http://backend", session=fake_session(payload=ROWS), normalizer=_Broken())
    snap = st.trigger_fetch()
    assert snap.status == FetchStatus.FAILURE
    assert not snap.loading
    assert "boom" in snap.error
    assert snap.records[0].region == "AT13"
    assert snap.stats.total_records == 1

def test_loading_snapshot_clears_previous_error(fake_session):
    s = fake_session(status_code=500)
    st = DashboardState(backend_url="http://backend", session=s)
    failed = st.trigger_fetch()
    assert failed.status == FetchStatus.FAILURE and failed.error

    entered, release = threading.Event(), threading.Event()
    ok = requests.Response()
    ok.status_code = 200
    ok._content = b'[{"nuts1": "DE1", "p": "1005.3"}]'

    def slow_get(*args, **kwargs):
        entered.set()
        release.wait(5)
        return ok
    s.get.side_effect = slow_get

    t = threading.Thread(target=st.trigger_fetch)
    t.start()
    assert entered.wait(5)
    in_flight = st.snapshot()
    assert in_flight.loading
    assert in_flight.error is None
    release.set()
    t.join(5)

    assert st.snapshot().status == FetchStatus.SUCCESS
    assert st.snapshot().records[0].region == "DE1"
