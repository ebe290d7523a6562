"""Test the exception hierarchy and enum members."""

from futurechain.core.enums import FailureKind, LogFormat, SettlementState
from futurechain.core.errors import (
    ChainTypeError,
    ConfigError,
    DomainError,
    FutureChainError,
    NonExceptionRejection,
)


class PaymentDeclined(DomainError):
    pass


class TestHierarchy:
    def test_library_errors_share_base(self):
        for cls in (ConfigError, ChainTypeError, NonExceptionRejection):
            assert issubclass(cls, FutureChainError)

    def test_domain_error_is_not_library_error(self):
        assert not issubclass(DomainError, FutureChainError)


class TestDomainError:
    def test_message_defaults_to_tag(self):
        assert str(PaymentDeclined()) == "PaymentDeclined"

    def test_data_is_copied(self):
        data = {"amount": 10}
        err = PaymentDeclined(data=data)
        data["amount"] = 20
        assert err.data == {"amount": 10}

    def test_equality_and_hash(self):
        a = PaymentDeclined("no funds", data={"amount": 10})
        b = PaymentDeclined("no funds", data={"amount": 10})
        assert a == b
        assert hash(a) == hash(b)
        assert a != PaymentDeclined("other", data={"amount": 10})

    def test_repr(self):
        err = PaymentDeclined(data={"amount": 1})
        assert repr(err) == "PaymentDeclined(tag='PaymentDeclined', data={'amount': 1})"


class TestNonExceptionRejection:
    def test_keeps_value(self):
        exc = NonExceptionRejection({"code": 1})
        assert exc.value == {"code": 1}
        assert "non-exception value" in str(exc)


class TestEnums:
    def test_settlement_states(self):
        assert {s.value for s in SettlementState} == {
            "pending", "fulfilled", "rejected", "cancelled",
        }

    def test_failure_kinds(self):
        assert {k.value for k in FailureKind} == {"domain", "host", "unknown"}

    def test_log_formats(self):
        assert LogFormat("json") == LogFormat.JSON
