import pytest
from prometheus_client import REGISTRY


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.mark.unit
def test_healthz_reports_database_and_detail_client(client):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.get_json() == {
        "status": "ok",
        "checks": {"database": "ok", "song_detail": "configured"},
    }


@pytest.mark.unit
def test_healthz_without_detail_client(app, client):
    app.extensions['song_detail_client'] = None
    body = client.get('/healthz').get_json()
    assert body["checks"]["song_detail"] == "unavailable"


@pytest.mark.unit
def test_metrics_endpoint_exposes_catalog_counters(client):
    before = _sample('songlib_catalog_mutations_total', {'operation': 'create'})
    lookups_before = _sample('songlib_detail_lookups_total', {'outcome': 'ok'})

    assert client.post('/library/song', json={"song": "Yellow", "group": "Coldplay"}).status_code == 201
    client.get('/library/songs')

    assert _sample('songlib_catalog_mutations_total', {'operation': 'create'}) == before + 1
    # the stub client bypasses the HTTP client, so no lookup is recorded
    assert _sample('songlib_detail_lookups_total', {'outcome': 'ok'}) == lookups_before

    r = client.get('/metrics')
    assert r.status_code == 200
    text = r.get_data(as_text=True)
    assert 'songlib_catalog_mutations_total' in text
    assert 'songlib_catalog_page_entries_bucket' in text


@pytest.mark.unit
def test_delete_of_missing_song_is_not_counted(client):
    before = _sample('songlib_catalog_mutations_total', {'operation': 'delete'})
    assert client.delete('/library/song/31337').status_code == 204
    assert _sample('songlib_catalog_mutations_total', {'operation': 'delete'}) == before
