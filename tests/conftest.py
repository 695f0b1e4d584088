import datetime as dt
import os
import random

# Configuration is read at import time, so the environment is pinned before
# any financesaathi module is imported.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_TYPE"] = "memory"
os.environ["ACQUISITION_PROVIDER"] = "mock"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORE_RAW_CONTENT"] = "false"
for key in ("OPENAI_API_KEY", "OPENROUTER_API_KEY", "ANTHROPIC_API_KEY"):
    os.environ[key] = ""

import pytest

from financesaathi.services.acquisition_service import AcquisitionService
from financesaathi.services.database import MemoryAdapter
from financesaathi.services.fallback_generator import FallbackGenerator
from financesaathi.services.field_extractor import FieldExtractor
from financesaathi.services.providers import MockProvider
from financesaathi.services.upload_pipeline import UploadPipeline

TODAY = dt.date(2025, 3, 15)
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture
def store():
    return MemoryAdapter()


@pytest.fixture
def image_provider():
    return MockProvider()


@pytest.fixture
def pdf_provider():
    return MockProvider(text="Reliance Digital\nInvoice Date: 02-03-25\nAmount Payable: Rs. 1,24,999.00", confidence=95.0)


@pytest.fixture
def pipeline(store, image_provider, pdf_provider, rng, today):
    return UploadPipeline(
        store,
        AcquisitionService(provider=image_provider, pdf_provider=pdf_provider, timeout=1.0),
        extractor=FieldExtractor(rng=rng, today=today),
        fallback_generator=FallbackGenerator(rng=rng, today=today),
    )


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from financesaathi.main import app

    # Entering the context runs the startup event, which builds a fresh in-memory store
    with TestClient(app) as test_client:
        yield test_client
