import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, StreamingResponse
from openai import AsyncOpenAI, OpenAIError

from .assistant import AssistantRelay, Environment, RequestCancelled
from .config import Settings, get_settings
from .plugins.stock_plugin import StockPlugin
from .schemas import ChatRequest, ConfigResponse

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Assistant Chat")

# Get the templates directory (in the same package)
TEMPLATES_DIR = Path(__file__).parent / "templates"


@lru_cache
def get_client() -> AsyncOpenAI:
    """Shared hosted-platform client, created on first use."""
    return AsyncOpenAI(api_key=get_settings().openai_api_key)


def create_plugins() -> list:
    """Plugins that provide the tools the assistant may call."""
    return [StockPlugin()]


def tool_schemas() -> list:
    return Environment(create_plugins(), logger).tool_schemas()


@app.get("/")
async def get():
    return FileResponse(str(TEMPLATES_DIR / "index.html"))


@app.get("/api/config", response_model=ConfigResponse)
async def get_config(settings: Settings = Depends(get_settings)):
    """Report required environment variables that are missing."""
    return ConfigResponse(missingKeys=settings.missing_keys())


@app.get("/api/tools")
async def get_tools():
    """Tool definitions to configure on the hosted assistant."""
    return tool_schemas()


@app.post("/api")
async def chat(
    body: ChatRequest,
    request: Request,
    client: AsyncOpenAI = Depends(get_client),
    settings: Settings = Depends(get_settings),
):
    """Append the message to a thread and stream the assistant run back."""
    relay = AssistantRelay(
        client, settings, create_plugins(), is_disconnected=request.is_disconnected
    )
    try:
        thread_id, message_id = await relay.start(body.conversation_id, body.message)
    except OpenAIError as e:
        logger.error(f"ERROR: Failed to submit message: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except RequestCancelled:
        logger.info("SYSTEM: Client disconnected before the run started")
        raise HTTPException(status_code=499, detail="Client disconnected")

    return StreamingResponse(
        relay.stream(thread_id, message_id), media_type="text/plain; charset=utf-8"
    )
