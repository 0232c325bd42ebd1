# tests/test_fingerprint.py

from bwdedup.common.models import Config, DedupConfig, DedupKey, IgnoreConfig, NormalizeConfig
from bwdedup.dedup.fingerprint import FilterFingerprinter, PolicyFingerprinter, build_fingerprinter

WHOLE_RECORD = Config(dedup=DedupConfig(policy_keys=()))


def _item(uris, **extra):
    item = {
        "id": "1",
        "name": "Example",
        "login": {"username": "a@x.com", "password": "p1", "uris": uris},
    }
    item.update(extra)
    return item


def test_strategy_selected_from_policy_keys():
    assert isinstance(build_fingerprinter(Config()), PolicyFingerprinter)
    assert isinstance(build_fingerprinter(WHOLE_RECORD), FilterFingerprinter)


def test_ignored_key_anywhere_does_not_change_fingerprint():
    fp = build_fingerprinter(WHOLE_RECORD)
    a = _item([{"uri": "a.com"}], id="1", revisionDate="2023")
    b = _item([{"uri": "a.com"}], id="2", revisionDate="2024")
    b["login"]["uris"][0]["id"] = "nested"

    assert fp.fingerprint(a) == fp.fingerprint(b)


def test_non_ignored_key_changes_fingerprint():
    fp = build_fingerprinter(WHOLE_RECORD)
    assert fp.fingerprint(_item([], notes="x")) != fp.fingerprint(_item([], notes="y"))


def test_ignore_paths_only_remove_exact_location():
    config = Config(
        dedup=DedupConfig(policy_keys=()),
        ignore=IgnoreConfig(keys=frozenset(), paths=("login.totp",)),
    )
    fp = build_fingerprinter(config)
    a = _item([], totp="top-a")
    b = _item([], totp="top-a")
    a["login"]["totp"] = "one"
    b["login"]["totp"] = "two"
    assert fp.fingerprint(a) == fp.fingerprint(b)

    b["totp"] = "top-b"
    assert fp.fingerprint(a) != fp.fingerprint(b)


def test_uri_order_only_matters_when_sorting_disabled():
    a = _item([{"uri": "b.com"}, {"uri": "a.com"}])
    b = _item([{"uri": "a.com"}, {"uri": "b.com"}])

    sorted_fp = build_fingerprinter(WHOLE_RECORD)
    assert sorted_fp.fingerprint(a) == sorted_fp.fingerprint(b)

    unsorted_fp = build_fingerprinter(Config(
        dedup=DedupConfig(policy_keys=()),
        normalize=NormalizeConfig(sort_uris=False),
    ))
    assert unsorted_fp.fingerprint(a) != unsorted_fp.fingerprint(b)


def test_filter_fingerprint_leaves_record_untouched():
    config = Config(
        dedup=DedupConfig(policy_keys=()),
        normalize=NormalizeConfig(trim_strings=True, lowercase_strings=True),
    )
    item = _item([{"uri": "B.com "}, {"uri": "a.com"}], name=" Mixed ")
    before = repr(item)
    build_fingerprinter(config).fingerprint(item)
    assert repr(item) == before


def test_policy_fingerprint_normalizes_strings():
    fp = build_fingerprinter(Config(normalize=NormalizeConfig(trim_strings=True, lowercase_strings=True)))
    a = _item([{"uri": "https://X.com"}])
    b = _item([{"uri": "https://x.com/"}])
    b["login"]["username"] = "  A@X.COM "
    assert fp.fingerprint(a) == fp.fingerprint(b)


def test_policy_uri_key_keeps_original_order():
    fp = PolicyFingerprinter([DedupKey.URI], NormalizeConfig(sort_uris=True))
    a = _item([{"uri": "b.com"}, {"uri": "a.com"}])
    b = _item([{"uri": "a.com"}, {"uri": "b.com"}])
    assert fp.fingerprint(a) != fp.fingerprint(b)
