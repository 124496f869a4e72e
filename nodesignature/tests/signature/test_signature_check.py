import pytest

from nodesignature.app.errors import (
    IncompatibleVersionError,
    MalformedSignatureError,
    SignatureError,
    SignatureMismatchError,
)
from nodesignature.app.schemas.scheme import NS_V1, NSGN_V001
from nodesignature.app.signature.node_signature import NodeSignature

from nodesignature.tests.fixtures.pod_factory import load_pods, shuffled


def _pod_signature(scheme=NSGN_V001) -> NodeSignature:
    return NodeSignature.from_items(load_pods(), scheme=scheme)


# ---------------------------------------------------------------------------
# Signature text
# ---------------------------------------------------------------------------

def test_sign_layout():
    sig = _pod_signature()
    text = sig.sign()

    assert text.startswith("nsgnv001")
    assert text[8:] == sig.hexdigest()
    assert len(text) == 8 + 16


def test_sign_layout_with_separator():
    sig = _pod_signature(NS_V1)
    text = sig.sign()

    assert text.startswith("nsv1://")
    assert text[7:] == sig.hexdigest()
    assert len(text) == 7 + 40


def test_empty_signature_text():
    assert NodeSignature().sign() == "nsgnv001ef46db3751d8e999"


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("scheme", [NSGN_V001, NS_V1])
def test_check_accepts_own_signature(scheme):
    sig = _pod_signature(scheme)
    sig.check(sig.sign())


def test_check_accepts_signature_of_reordered_working_set():
    pods = load_pods()

    observed = NodeSignature.from_items(shuffled(pods))
    published = NodeSignature.from_items(pods).sign()

    observed.check(published)


def test_check_accepts_empty_working_set_signature():
    sig = NodeSignature()
    sig.check(sig.sign())


# ---------------------------------------------------------------------------
# Mismatch
# ---------------------------------------------------------------------------

def test_check_reports_mismatch_with_both_digests():
    pods = load_pods()
    a = NodeSignature.from_items(pods[:20])
    b = NodeSignature.from_items(pods[20:])

    with pytest.raises(SignatureMismatchError) as excinfo:
        a.check(b.sign())

    assert excinfo.value.expected == b.hexdigest()
    assert excinfo.value.actual == a.hexdigest()
    assert isinstance(excinfo.value, SignatureError)


def test_short_but_valid_length_digest_is_a_mismatch():
    sig = _pod_signature()

    with pytest.raises(SignatureMismatchError):
        sig.check("nsgnv001deadbeef")


def test_digest_comparison_is_case_sensitive_lowercase():
    sig = _pod_signature(NS_V1)

    with pytest.raises(SignatureMismatchError):
        sig.check("nsv1://" + sig.hexdigest().upper())


# ---------------------------------------------------------------------------
# Malformed
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "candidate",
    ["", "x", "nsgn", "nsgnv001", "nsgnv001abcdef1"],
)
def test_check_rejects_short_strings(candidate):
    with pytest.raises(MalformedSignatureError):
        _pod_signature().check(candidate)


def test_check_rejects_foreign_prefix():
    sig = _pod_signature()

    with pytest.raises(MalformedSignatureError):
        sig.check("xsgnv001" + sig.hexdigest())


@pytest.mark.parametrize("version", ["vABC", "1001", "v00a", "V001"])
def test_check_rejects_unparseable_version(version):
    sig = _pod_signature()

    with pytest.raises(MalformedSignatureError):
        sig.check("nsgn" + version + sig.hexdigest())


def test_check_rejects_missing_separator():
    sig = _pod_signature(NS_V1)

    with pytest.raises(MalformedSignatureError):
        sig.check("nsv1" + sig.hexdigest())


def test_minimum_length_is_counted_in_bytes():
    sig = _pod_signature()

    # 8 header bytes + 6 bytes of digest text, below the 16 byte minimum
    with pytest.raises(MalformedSignatureError):
        sig.check("nsgnv001" + "é" * 3)

    # 8 header bytes + 8 bytes of digest text
    with pytest.raises(SignatureMismatchError) as excinfo:
        sig.check("nsgnv001" + "é" * 4)

    assert excinfo.value.expected == "éééé"


@pytest.mark.parametrize(
    "candidate",
    ["nsgé001ef46db3751d8e999", "nsgnv0é1ef46db3751d8e999"],
)
def test_check_rejects_non_ascii_header(candidate):
    with pytest.raises(MalformedSignatureError):
        NodeSignature().check(candidate)


def test_check_rejects_non_ascii_separator():
    sig = _pod_signature(NS_V1)

    with pytest.raises(MalformedSignatureError):
        sig.check("nsv1→" + sig.hexdigest())


def test_malformed_is_a_value_error():
    with pytest.raises(ValueError):
        NodeSignature().check("")


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

def test_check_rejects_other_version_even_if_digest_matches():
    sig = _pod_signature()

    with pytest.raises(IncompatibleVersionError) as excinfo:
        sig.check("nsgnv002" + sig.hexdigest())

    assert excinfo.value.version == "v002"
    assert excinfo.value.supported == "v001"


def test_check_rejects_other_version_with_separator():
    sig = _pod_signature(NS_V1)

    with pytest.raises(IncompatibleVersionError):
        sig.check("nsv2://" + sig.hexdigest())


def test_schemes_do_not_interoperate():
    pods = load_pods()
    legacy = NodeSignature.from_items(pods, scheme=NS_V1)
    current = NodeSignature.from_items(pods, scheme=NSGN_V001)

    with pytest.raises(SignatureError):
        current.check(legacy.sign())

    with pytest.raises(SignatureError):
        legacy.check(current.sign())
