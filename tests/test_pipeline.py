from item_groups.ingest.pipeline import QuestionnairePipeline, build_questionnaire


def test_two_roots_with_one_child():
    groups = build_questionnaire(["/1/10^Q1^", "/1/20^Q2^", "/1/10/100^Q1a^"])

    assert list(groups) == ["1"]
    first, second = groups["1"]
    assert (first.link_id, first.question) == ("/1/10", "Q1")
    assert [child.link_id for child in first.items] == ["/1/10/100"]
    assert first.items[0].question == "Q1a"
    assert second.link_id == "/1/20"
    assert second.items == []


def test_three_levels_resolve_in_one_pass():
    groups = build_questionnaire(["/1/10/100/1000^Deep^", "/1/10/100^Mid^", "/1/10^Top^"])

    (top,) = groups["1"]
    assert top.question == "Top"
    (mid,) = top.items
    assert mid.question == "Mid"
    (deep,) = mid.items
    assert deep.question == "Deep"
    assert deep.items == []


def test_orphan_without_roots_gives_empty_mapping():
    result = QuestionnairePipeline().run(["/1/10/100^Orphan^"])

    assert result.groups == {}
    assert result.stats.dropped == 1


def test_empty_input_gives_empty_mapping():
    assert build_questionnaire([]) == {}


def test_every_root_lands_in_exactly_one_group():
    raw = ["/1/10^A^", "/2/20^B^", "/1/11^C^", "/3/30/300^orphan^", "/2/20/200^D^"]
    groups = build_questionnaire(raw)

    link_ids = [node.link_id for nodes in groups.values() for node in nodes]
    assert sorted(link_ids) == ["/1/10", "/1/11", "/2/20"]
    assert list(groups) == ["1", "2"]


def test_orphan_is_absent_from_output():
    payload = QuestionnairePipeline().run(["/1/10^A^", "/1/77/700^lost^"]).to_dict()

    assert "/1/77/700" not in repr(payload)


def test_rerunning_produces_identical_output():
    raw = ["/1/10^Q1^", "/2/20^Q2^", "/1/10/100^Q1a^", "/1/10/101^Q1b^", "/2/20/200/2000^deep^", "/2/20/200^mid^"]

    first = QuestionnairePipeline().run(raw).to_dict()
    second = QuestionnairePipeline().run(raw).to_dict()

    assert first == second
    assert list(first) == list(second) == ["1", "2"]


def test_malformed_records_do_not_abort_the_batch():
    groups = build_questionnaire([None, "", "no caret here", "/1/10^Kept^"])

    assert [node.question for node in groups["1"]] == ["Kept"]


def test_deep_chain_runs_and_serializes():
    raw = ["/r/n0^root^"] + [f"/r/x/n{i - 1}/n{i}^q{i}^" for i in range(1, 1500)]

    result = QuestionnairePipeline().run(raw)
    payload = result.to_dict()

    assert result.stats.max_nesting == 1500
    level = payload["r"][0]
    depth = 1
    while level["Items"]:
        (level,) = level["Items"]
        depth += 1
    assert depth == 1500
    assert level["Question"] == "q1499"
