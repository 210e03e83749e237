"""
Tests for CatalogueTransport error mapping, using a stub requests session.
Run: python tests/test_transport.py
"""

import requests

from fakes import page

from weekend_cinema.errors import FetchFailed
from weekend_cinema.models import FilterState
from weekend_cinema.query_compiler import QueryCompiler
from weekend_cinema.transport import CatalogueTransport


class StubResponse:
	def __init__(self, status_code=200, body=None, bad_json=False):
		self.status_code = status_code
		self._body = body
		self._bad_json = bad_json

	def raise_for_status(self):
		if self.status_code >= 400:
			raise requests.HTTPError(f"{self.status_code} Error", response=self)

	def json(self):
		if self._bad_json:
			raise ValueError("Expecting value: line 1 column 1 (char 0)")
		return self._body


class StubSession:
	def __init__(self, outcome):
		self.outcome = outcome
		self.headers = {}
		self.calls = []

	def get(self, url, timeout=None):
		self.calls.append((url, timeout))
		if isinstance(self.outcome, Exception):
			raise self.outcome
		return self.outcome

	def close(self):
		pass


def descriptor():
	return QueryCompiler().compile(FilterState(free_text_query="dune"), "k")


def expect_failure(session, fragment):
	transport = CatalogueTransport(session=session)
	try:
		transport.fetch(descriptor())
	except FetchFailed as e:
		if fragment not in e.reason:
			raise AssertionError(f"reason '{e.reason}' lacks '{fragment}'")
		return
	raise AssertionError("expected FetchFailed")


def test_success_returns_json():
	session = StubSession(StubResponse(body=page()))
	transport = CatalogueTransport(timeout=4.5, session=session)
	body = transport.fetch(descriptor())
	assert body == page()
	url, timeout = session.calls[0]
	assert url.startswith("https://api.themoviedb.org/3/search/movie?")
	assert "query=dune" in url
	assert timeout == 4.5
	assert session.headers["Accept"] == "application/json"


def test_http_error():
	expect_failure(StubSession(StubResponse(status_code=401)), "HTTP 401")
	expect_failure(StubSession(StubResponse(status_code=503)), "HTTP 503")


def test_network_error():
	expect_failure(StubSession(requests.ConnectionError("refused")), "ConnectionError")
	expect_failure(StubSession(requests.Timeout("slow")), "Timeout")


def test_bad_json():
	expect_failure(StubSession(StubResponse(bad_json=True)), "not valid JSON")


def main():
	print("Running CatalogueTransport tests...")
	test_success_returns_json()
	test_http_error()
	test_network_error()
	test_bad_json()
	print("All CatalogueTransport tests passed!")


if __name__ == '__main__':
	main()
