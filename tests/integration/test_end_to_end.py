"""End-to-end flow over a directory with a recording and a document."""

from doctalk.core import Citation, EngineAnswer, compute_session_id, index_name_for
from doctalk.pipeline import KnowledgeSession, TranscriptionPipeline
from doctalk.workspace import classify


class TestRecordingAndDocument:
    def test_transcribe_then_ingest(self, config, stub_asr, stub_converter, make_engine, media_dir):
        classified = classify(media_dir)
        assert [p.name for p in classified.transcribable] == ["a.mp3"]
        assert [p.name for p in classified.ingestible] == ["b.pdf"]

        pipeline = TranscriptionPipeline(config, asr=stub_asr, converter=stub_converter)
        for media in classified.transcribable:
            pipeline.ensure_transcript(media)

        transcript = media_dir / "a.txt"
        assert transcript.is_file()
        assert transcript.stat().st_size > 0

        engine = make_engine(EngineAnswer(
            result="It was recorded.",
            sources=[Citation("a.txt", "x/a.txt")],
        ))
        session = KnowledgeSession(engine)
        session_id = session.initialize(str(media_dir))

        documents, index_name = engine.ingested[0]
        assert sorted(p.name for p in documents) == ["a.txt", "b.pdf"]
        assert session_id == compute_session_id(str(media_dir))
        assert index_name == index_name_for(session_id)

        answer = session.ask("What was said?")
        assert answer.answer_text == "It was recorded."
        assert answer.sources == ("a.txt - x/a.txt",)

    def test_second_run_reuses_transcript(self, config, stub_asr, stub_converter, media_dir):
        pipeline = TranscriptionPipeline(config, asr=stub_asr, converter=stub_converter)

        for _ in range(2):
            for media in classify(media_dir).transcribable:
                pipeline.ensure_transcript(media)

        assert stub_asr.calls == [media_dir / "a.16k.wav"]
