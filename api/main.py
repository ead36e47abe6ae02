import os
import logging
import logging.config

import yaml
from fastapi import FastAPI, HTTPException

from api.schemas import (
    DecodeRequest,
    DecodeResponse,
    ProjectRequest,
    ProjectResponse,
    SampleSchema,
    SpanSchema,
    TokenSampleSchema,
)
from nametag.errors import MalformedLineError
from nametag.models import Span
from nametag.pipeline import decode_text, project_document


def setup_logging():
    cfg_path = os.path.join("configs", "logging.yaml")
    if os.path.exists(cfg_path):
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            os.makedirs("logs", exist_ok=True)
            logging.config.dictConfig(config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"[logging] Failed to load logging.yaml: {e}")
            logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.INFO)


setup_logging()
logger = logging.getLogger("api")

app = FastAPI(
    title="nametag",
    version="0.1.0",
    description="Decode bracket-tagged NER corpora and project token offsets into training samples.",
)


def _span_schema(s: Span) -> SpanSchema:
    return SpanSchema(start=s.start, end=s.end, type=s.type)


@app.post("/decode", response_model=DecodeResponse)
def decode(req: DecodeRequest) -> DecodeResponse:
    logger.info("Received /decode request")
    try:
        samples = decode_text(req.text)
    except MalformedLineError as e:
        logger.warning("Rejected corpus: %s", e)
        raise HTTPException(
            status_code=422,
            detail={"reason": e.reason, "line": e.line, "line_number": e.line_number},
        )

    return DecodeResponse(
        samples=[
            SampleSchema(
                tokens=list(s.tokens),
                spans=[_span_schema(span) for span in s.spans],
                reset_adaptive_state=s.reset_adaptive_state,
                line=str(s),
            )
            for s in samples
        ]
    )


@app.post("/project", response_model=ProjectResponse)
def project(req: ProjectRequest) -> ProjectResponse:
    logger.info("Received /project request")
    try:
        sentences = [Span(i.start, i.end) for i in req.sentences]
        tokens = [Span(i.start, i.end) for i in req.tokens]
        samples = project_document(req.text, sentences, tokens)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ProjectResponse(
        samples=[
            TokenSampleSchema(
                text=s.text,
                spans=[_span_schema(span) for span in s.spans],
                tokens=list(s.tokens),
            )
            for s in samples
        ]
    )
