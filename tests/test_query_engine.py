"""Tests for the single-attempt query engine, with dns.query.udp stubbed out."""

import asyncio
import time

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype
import dns.rrset
import pytest

from dnsbench.models import RecordType, ResolverTarget
from dnsbench.query_engine import DNSQueryEngine, record_type_for_network


TARGET = ResolverTarget("Test", "192.0.2.53", 5353)


def answer(query, rdtype="A", address="93.184.216.34"):
    response = dns.message.make_response(query)
    response.answer.append(
        dns.rrset.from_text(query.question[0].name, 300, "IN", rdtype, address)
    )
    return response


def run_query(engine, name="example.com", record_type=RecordType.A):
    return asyncio.run(engine.query(TARGET, name, record_type))


@pytest.fixture
def sent(monkeypatch):
    """Install a fake dns.query.udp; the test sets ``sent['reply']``."""
    state = {"calls": []}

    def fake_udp(message, where, timeout=None, port=53, **kwargs):
        state["calls"].append((message, where, port, timeout))
        reply = state["reply"]
        if isinstance(reply, Exception):
            raise reply
        return reply(message)

    monkeypatch.setattr(dns.query, "udp", fake_udp)
    return state


def test_successful_lookup(sent):
    sent["reply"] = answer
    outcome = run_query(DNSQueryEngine(timeout=2.0))

    assert outcome.is_success
    assert outcome.elapsed_ms >= 0
    assert outcome.query_name == "example.com"

    message, where, port, timeout = sent["calls"][0]
    assert len(sent["calls"]) == 1
    assert where == "192.0.2.53"
    assert port == 5353
    assert timeout == 2.0
    assert message.question[0].rdtype == dns.rdatatype.A


def test_aaaa_lookup(sent):
    sent["reply"] = lambda q: answer(q, "AAAA", "2606:2800:220:1::")
    outcome = run_query(DNSQueryEngine(), record_type=RecordType.AAAA)

    assert outcome.is_success
    assert sent["calls"][0][0].question[0].rdtype == dns.rdatatype.AAAA


def test_timeout_is_a_failure(sent):
    sent["reply"] = dns.exception.Timeout()
    outcome = run_query(DNSQueryEngine(timeout=1.5))

    assert not outcome.is_success
    assert outcome.error == "timeout after 1500ms"


def test_nxdomain_is_a_failure(sent):
    def nxdomain(query):
        response = dns.message.make_response(query)
        response.set_rcode(dns.rcode.NXDOMAIN)
        return response

    sent["reply"] = nxdomain
    outcome = run_query(DNSQueryEngine())

    assert outcome.error == "NXDOMAIN from 192.0.2.53:5353"


def test_empty_answer_is_a_failure(sent):
    sent["reply"] = dns.message.make_response
    outcome = run_query(DNSQueryEngine())

    assert outcome.error == "no A records for example.com"


def test_wrong_record_type_is_a_failure(sent):
    sent["reply"] = answer
    outcome = run_query(DNSQueryEngine(), record_type=RecordType.AAAA)

    assert outcome.error == "no AAAA records for example.com"


def test_network_error_is_recorded(sent):
    sent["reply"] = OSError("Network is unreachable")
    outcome = run_query(DNSQueryEngine())

    assert outcome.error == "Network is unreachable"
    assert len(sent["calls"]) == 1


def test_error_without_text_uses_class_name(sent):
    sent["reply"] = dns.message.ShortHeader()
    outcome = run_query(DNSQueryEngine())

    assert outcome.error
    assert not outcome.is_success


@pytest.mark.parametrize("network, expected", [
    ("ip4", RecordType.A),
    ("IPv4", RecordType.A),
    ("ip6", RecordType.AAAA),
    ("ipv6", RecordType.AAAA),
    ("tcp", RecordType.A),
    ("", RecordType.A),
])
def test_record_type_for_network(network, expected):
    assert record_type_for_network(network) == expected


def test_elapsed_time_includes_timeout_wait(monkeypatch):
    def slow_timeout(message, where, timeout=None, port=53, **kwargs):
        time.sleep(timeout)
        raise dns.exception.Timeout()

    monkeypatch.setattr(dns.query, "udp", slow_timeout)
    outcome = run_query(DNSQueryEngine(timeout=0.2))

    assert outcome.error == "timeout after 200ms"
    assert outcome.elapsed_ms >= 200
