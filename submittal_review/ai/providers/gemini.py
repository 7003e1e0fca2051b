"""Gemini provider implementation."""

from typing import Any
from uuid import uuid4

from braintrust.wrappers.google_genai import setup_genai
from google import genai
from google.genai import types

from submittal_review.ai.base import (
    ChatReply,
    GroundingCitation,
    ReviewProvider,
    SessionHandle,
)
from submittal_review.ai.gemini.config import GeminiSettings, get_gemini_settings
from submittal_review.ai.gemini.exceptions import GeminiAuthenticationError
from submittal_review.review.encoder import decode_document
from submittal_review.review.exceptions import (
    EmptyResponseError,
    ReviewError,
    SessionNotInitializedError,
    TransportError,
)
from submittal_review.review.extraction import (
    parse_submittal_record,
    submittal_response_schema,
)
from submittal_review.review.prompts import (
    CHAT_ACKNOWLEDGEMENT,
    CHAT_INSTRUCTIONS,
    build_review_prompt,
)
from submittal_review.review.schemas import SubmittalRecord
from submittal_review.utils.logger import logger


def extract_citations(response: Any) -> list[GroundingCitation]:
    """Collect web grounding citations from a chat response.

    Only the first candidate is consulted. Chunks without a uri are dropped.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    citations = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        citations.append(GroundingCitation(uri=uri, title=getattr(web, "title", None)))
    return citations


class GeminiReviewProvider(ReviewProvider):
    """Gemini provider implementation.

    Sends the submittal inline with every extraction request and seeds chat
    sessions with it once, with Google Search grounding enabled.
    """

    def __init__(self, settings: GeminiSettings | None = None):
        """Initialize Gemini provider.

        Args:
            settings: Gemini settings; loaded from the environment when omitted
        """
        self._client: genai.Client | None = None
        self.settings = settings or get_gemini_settings()

    def _get_client(self) -> genai.Client:
        """Get or create the Gemini client.

        Automatically sets up Braintrust tracing if enabled.
        """
        if self._client is None:
            try:
                if self.settings.enable_braintrust and self.settings.braintrust_project_name:
                    logger.info(
                        f"Setting up Gemini with Braintrust tracing enabled (project: {self.settings.braintrust_project_name})"
                    )
                    setup_genai(project_name=self.settings.braintrust_project_name)

                self._client = genai.Client(
                    api_key=self.settings.api_key,
                    http_options=types.HttpOptions(timeout=self.settings.timeout * 1000),
                )
                logger.info("Gemini client initialized")
            except Exception as e:
                logger.error("Failed to initialize Gemini client", error=str(e))
                raise GeminiAuthenticationError(f"Failed to authenticate: {e}")
        return self._client

    @staticmethod
    def _document_part(encoded_document: str, mime_type: str) -> types.Part:
        return types.Part.from_bytes(
            data=decode_document(encoded_document), mime_type=mime_type
        )

    async def analyze(
        self,
        encoded_document: str,
        mime_type: str,
        focus_instruction: str | None = None,
    ) -> SubmittalRecord:
        """Run the two-pass submittal review and validate the result.

        Args:
            encoded_document: Base64 document bytes without transport prefix
            mime_type: Declared content type of the document
            focus_instruction: Optional reviewer criterion to prioritize

        Returns:
            SubmittalRecord: The validated extraction result
        """
        prompt = build_review_prompt(focus_instruction)
        document = self._document_part(encoded_document, mime_type)
        config = types.GenerateContentConfig(
            temperature=self.settings.temperature,
            response_mime_type="application/json",
            response_json_schema=submittal_response_schema(),
        )

        try:
            client = self._get_client()
            logger.info(
                "Generating submittal review",
                model_name=self.settings.model_name,
                mime_type=mime_type,
                has_focus=bool(focus_instruction and focus_instruction.strip()),
            )
            response = await client.aio.models.generate_content(
                model=self.settings.model_name,
                contents=[document, prompt],
                config=config,
            )
        except ReviewError:
            raise
        except Exception as e:
            logger.error("Submittal review request failed", error=str(e))
            raise TransportError(f"Submittal review request failed: {e}")

        record = parse_submittal_record(response.text)
        logger.info(
            "Submittal review generated",
            submittal_number=record.submittal_number,
            recommended_status=record.recommended_status.value,
        )
        return record

    async def open_session(
        self, encoded_document: str, mime_type: str
    ) -> SessionHandle:
        """Create a grounded chat pre-seeded with the document.

        Args:
            encoded_document: Base64 document bytes without transport prefix
            mime_type: Declared content type of the document

        Returns:
            SessionHandle: Handle wrapping the SDK chat object
        """
        history = [
            types.Content(
                role="user",
                parts=[
                    self._document_part(encoded_document, mime_type),
                    types.Part.from_text(text=CHAT_INSTRUCTIONS),
                ],
            ),
            types.Content(
                role="model",
                parts=[types.Part.from_text(text=CHAT_ACKNOWLEDGEMENT)],
            ),
        ]
        config = types.GenerateContentConfig(
            temperature=self.settings.temperature,
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

        try:
            client = self._get_client()
            chat = client.aio.chats.create(
                model=self.settings.model_name, config=config, history=history
            )
        except ReviewError:
            raise
        except Exception as e:
            logger.error("Failed to open chat session", error=str(e))
            raise TransportError(f"Failed to open chat session: {e}")

        session = SessionHandle(session_id=uuid4().hex, chat=chat)
        logger.info("Chat session opened", session_id=session.session_id)
        return session

    async def send(self, session: SessionHandle | None, text: str) -> ChatReply:
        """Send one question on an open chat session.

        Args:
            session: Handle returned by ``open_session``
            text: The user's question

        Returns:
            ChatReply: Answer text and web citations
        """
        if session is None or session.chat is None:
            raise SessionNotInitializedError("Chat session has not been opened")

        try:
            response = await session.chat.send_message(text)
        except Exception as e:
            logger.error(
                "Chat message failed", session_id=session.session_id, error=str(e)
            )
            raise TransportError(f"Chat message failed: {e}")

        if not response.text:
            raise EmptyResponseError("No response text from model provider")

        citations = extract_citations(response)
        logger.info(
            "Chat reply received",
            session_id=session.session_id,
            citation_count=len(citations),
        )
        return ChatReply(text=response.text, citations=citations)
