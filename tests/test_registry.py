from marketwire.db import NEWS_SOURCES, ActivityLog, SourceRegistry
from marketwire.models import FieldMapping, Severity, SourceKind, SourceSpec, SourceUpdate


def _registry(store):
    return SourceRegistry(store, ActivityLog(store, echo=False))


async def _info_actions(registry):
    return [e.action for e in await registry.activity.recent() if e.severity == Severity.INFO]


async def test_create_assigns_identity_and_logs(store):
    registry = _registry(store)
    source = await registry.create(SourceSpec(name="Benzinga", url="https://api.benzinga.com/news"))

    assert source.id
    assert source.created_at is not None
    assert source.is_active
    assert source.kind == SourceKind.POLL
    assert await _info_actions(registry) == ['News source "Benzinga" added.']


async def test_sources_are_stored_camel_case(store):
    registry = _registry(store)
    source = await registry.create(
        SourceSpec(
            name="Polygon",
            url="https://api.polygon.io/v2/reference/news",
            api_key_env="POLYGON_API_KEY",
            field_mappings=[FieldMapping(field="headline", source_field="title")],
        )
    )

    data = await store.get(NEWS_SOURCES, source.id)
    assert data["apiKeyEnv"] == "POLYGON_API_KEY"
    assert data["isActive"] is True
    assert data["fieldMappings"] == [{"field": "headline", "sourceField": "title"}]


async def test_list_is_newest_first(store):
    registry = _registry(store)
    for name in ("one", "two", "three"):
        await registry.create(SourceSpec(name=name, url=f"https://{name}.example.com"))

    assert [s.name for s in await registry.list()] == ["three", "two", "one"]


async def test_update_merges_only_given_fields(store):
    registry = _registry(store)
    source = await registry.create(
        SourceSpec(name="Wire", url="https://wire.example.com", exclude_keywords=["offering"])
    )

    updated = await registry.update(source.id, SourceUpdate(url="https://wire.example.com/v2"))

    assert updated.url == "https://wire.example.com/v2"
    assert updated.name == "Wire"
    assert updated.exclude_keywords == ["offering"]
    assert updated.created_at == source.created_at
    assert 'News source "Wire" updated.' in await _info_actions(registry)


async def test_update_of_missing_source_returns_none(store):
    registry = _registry(store)
    assert await registry.update("missing", SourceUpdate(name="x")) is None


async def test_set_active_and_list_active(store):
    registry = _registry(store)
    poll = await registry.create(SourceSpec(name="Poll", url="https://poll.example.com"))
    push = await registry.create(SourceSpec(name="Push", url="wss://push.example.com", kind=SourceKind.PUSH))

    await registry.set_active(poll.id, False)

    assert [s.name for s in await registry.list_active()] == ["Push"]
    assert await registry.list_active(SourceKind.POLL) == []

    await registry.set_active(poll.id, True)
    assert [s.name for s in await registry.list_active(SourceKind.POLL)] == ["Poll"]
    assert (await registry.get(push.id)).is_active


async def test_delete_and_delete_missing(store):
    registry = _registry(store)
    source = await registry.create(SourceSpec(name="Gone", url="https://gone.example.com"))

    await registry.delete(source.id)
    await registry.delete(source.id)

    assert await registry.get(source.id) is None
    assert await _info_actions(registry) == [
        'News source "Gone" deleted.',
        'News source "Gone" added.',
    ]


async def test_import_skips_registered_names(store):
    registry = _registry(store)
    await registry.create(SourceSpec(name="Existing", url="https://a.example.com"))

    created = await registry.import_sources(
        [
            SourceSpec(name="Existing", url="https://b.example.com"),
            SourceSpec(name="Fresh", url="https://c.example.com"),
            SourceSpec(name="Fresh", url="https://d.example.com"),
        ]
    )

    assert [s.name for s in created] == ["Fresh"]
    assert (await registry.find_by_name("Existing")).url == "https://a.example.com"
    assert len(await registry.list()) == 2


async def test_update_ignores_none_for_required_fields(store):
    registry = _registry(store)
    source = await registry.create(
        SourceSpec(name="Wire", url="https://wire.example.com", api_key_env="WIRE_KEY")
    )

    updated = await registry.update(source.id, SourceUpdate(name=None, url="https://wire.example.com/v2"))

    assert updated.name == "Wire"
    assert updated.url == "https://wire.example.com/v2"
    assert (await store.get(NEWS_SOURCES, source.id))["name"] == "Wire"

    cleared = await registry.update(source.id, SourceUpdate(api_key_env=None))
    assert cleared.api_key_env is None


async def test_unreadable_source_is_skipped_with_warning(store):
    registry = _registry(store)
    good = await registry.create(SourceSpec(name="Good", url="https://good.example.com"))
    bad_id = await store.insert(NEWS_SOURCES, {"name": None, "url": "https://bad.example.com"})

    assert [s.id for s in await registry.list()] == [good.id]

    warnings = [e for e in await registry.activity.recent() if e.severity == Severity.WARN]
    assert warnings[0].details["id"] == bad_id
