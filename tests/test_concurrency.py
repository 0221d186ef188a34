"""
Concurrent access tests against the file-backed sqlite state.

Pool admission and feedback upserts for disjoint ids run from several threads
at once; model reads overlapping a training run see either the previous or the
new artifact, never a missing or partial one.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from backend.services.recommendation_model import ArtifactCache, RecommendationModel
from curation.models.feedback import ItemMetadata, Sentiment

WORKERS = 4
PER_WORKER = 10


def _pool_worker(state, make_item, worker):
    for n in range(0, PER_WORKER, 2):
        state.content_pool.insert_many([
            make_item(f"w{worker}-{n}"),
            make_item(f"w{worker}-{n + 1}"),
        ])


def _feedback_worker(state, worker):
    sentiment = Sentiment.POSITIVE if worker % 2 else Sentiment.NEGATIVE
    for n in range(PER_WORKER):
        state.feedback_store.upsert(f"f{worker}-{n}", sentiment, ItemMetadata(title=f"Item {n}"))


class TestConcurrentWrites:
    def test_disjoint_pool_and_feedback_writes(self, state, make_item):
        with ThreadPoolExecutor(max_workers=WORKERS * 2) as executor:
            futures = [executor.submit(_pool_worker, state, make_item, w) for w in range(WORKERS)]
            futures += [executor.submit(_feedback_worker, state, w) for w in range(WORKERS)]
            for future in futures:
                future.result()

        expected_ids = {f"w{w}-{n}" for w in range(WORKERS) for n in range(PER_WORKER)}
        assert state.content_pool.count() == WORKERS * PER_WORKER
        assert {e.item.id for e in state.content_pool.read_all()} == expected_ids
        assert state.feedback_store.counts() == {
            "positive": WORKERS // 2 * PER_WORKER,
            "negative": WORKERS // 2 * PER_WORKER,
        }

    def test_concurrent_duplicate_inserts_admit_once(self, state, make_item):
        batch = [make_item(f"dup{n}") for n in range(10)]
        with ThreadPoolExecutor(max_workers=WORKERS) as executor:
            added = list(executor.map(lambda _: state.content_pool.insert_many(batch), range(WORKERS)))
        assert sum(added) == 10
        assert state.content_pool.count() == 10


class TestReadsDuringTraining:
    def test_reader_sees_old_or_new_artifact(self, state):
        for n in range(3):
            state.feedback_store.like(f"p{n}", ItemMetadata(title=f"Homemade pasta recipe {n}", channel_title="Chef Anna"))
            state.feedback_store.dislike(f"n{n}", ItemMetadata(title=f"SHOCKING DRAMA {n}!!!", channel_title="Drama Zone"))
        assert state.model.train().success
        state.feedback_store.dislike("n3", ItemMetadata(title="MORE DRAMA!!!", channel_title="Drama Zone"))

        # A second model instance with its own cache, so every read goes to storage
        reader = RecommendationModel(state.feedback_store, state.kv_store, cache=ArtifactCache())
        done = threading.Event()
        observed = []
        errors = []

        def read_loop():
            try:
                while not done.is_set():
                    reader.invalidate()
                    artifact = reader.load()
                    observed.append(
                        None if artifact is None else (artifact.positive_count, artifact.negative_count)
                    )
            except Exception as e:
                errors.append(e)

        thread = threading.Thread(target=read_loop)
        thread.start()
        try:
            for _ in range(3):
                assert state.model.train().success
        finally:
            done.set()
            thread.join(timeout=30)

        assert not errors
        assert observed
        assert set(observed) <= {(3, 3), (3, 4)}
        assert reader.is_available()
        assert state.model.load().negative_count == 4
