from vivaya.services.avatars import DATA_URIS, LOCAL_PATHS, djb2, pick_masked_avatar


def test_djb2_matches_reference_values():
    assert djb2("") == 5381
    assert djb2("a") == (5381 * 33) ^ ord("a")
    assert 0 <= djb2("a-very-long-user-identifier-" * 10) < 2**32


def test_pick_is_deterministic():
    first = pick_masked_avatar("user-42")
    second = pick_masked_avatar("user-42")
    assert first == second
    assert first.index == djb2("user-42") % len(DATA_URIS)
    assert first.src.startswith("data:image/svg+xml;utf8,")


def test_used_set_avoids_duplicates_on_a_page():
    used: set[int] = set()
    picks = [pick_masked_avatar("same-user", used) for _ in range(len(DATA_URIS))]
    assert len({pick.index for pick in picks}) == len(DATA_URIS)
    assert used == set(range(len(DATA_URIS)))


def test_full_page_reuses_an_index():
    used = set(range(len(DATA_URIS)))
    pick = pick_masked_avatar("user-42", used)
    assert pick.index == djb2("user-42") % len(DATA_URIS)


def test_local_assets():
    pick = pick_masked_avatar("user-42", use_local_assets=True)
    assert pick.src == LOCAL_PATHS[pick.index]
    assert LOCAL_PATHS[0] == "/masked-avatars/a01.webp"
