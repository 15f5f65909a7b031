from assignment_analyzer.patterns import DEFAULT_SUBJECT_PATTERNS
from assignment_analyzer.subjects import SubjectClassifier, detect_subjects


def test_detect_subjects_matches_case_insensitively():
    assert detect_subjects("SELECT * FROM users WHERE id=1") == ("Databases",)


def test_detect_subjects_ranks_by_hits_and_keeps_top_three():
    text = "sort sort sort search stack queue tcp encryption"
    assert detect_subjects(text) == ("Algorithms", "Data Structures", "Networks")


def test_detect_subjects_defaults_to_general():
    assert detect_subjects("A pleasant walk in the park.") == ("General",)
    assert detect_subjects("") == ("General",)


def test_word_boundaries_prevent_partial_matches():
    classifier = SubjectClassifier()
    assert "Cybersecurity" not in classifier.hit_counts("encryptionless")
    assert classifier.hit_counts("the stack overflowed")["Data Structures"] == 1


def test_malformed_patterns_are_skipped(caplog):
    with caplog.at_level("WARNING"):
        classifier = SubjectClassifier({"Broken": ["(unclosed"], "Good": [r"\bcat\b"]})
    assert classifier.classify("cat") == ("Good",)
    assert "Skipping malformed pattern" in caplog.text


def test_custom_max_subjects():
    classifier = SubjectClassifier(DEFAULT_SUBJECT_PATTERNS, max_subjects=1)
    assert classifier.classify("sort stack stack") == ("Data Structures",)
    assert classifier.labels == list(DEFAULT_SUBJECT_PATTERNS)
