from tests.fakes.fake_relevance_provider import FakeRelevanceProvider, make_documents

__all__ = ["FakeRelevanceProvider", "make_documents"]
