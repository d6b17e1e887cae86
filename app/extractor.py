import logging
from typing import Any, Dict, Optional, Union
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseLanguageModel
from langchain_core.output_parsers import JsonOutputParser, PydanticOutputParser, StrOutputParser
from langchain_core.prompts import PromptTemplate
from app import config
from app.errors import ExtractionFailure
from app.schemas import output_parser, query_fields

logger = logging.getLogger(__name__)

PROMPT = PromptTemplate.from_template(
    "Parse the description provided by user to extract information about the real estate preferences.\n"
    "{format_instruction}\n"
    "{description}."
)

_llm = None


def _load_llm() -> BaseLanguageModel:
    global _llm
    if _llm is None:
        from langchain_google_genai import ChatGoogleGenerativeAI

        _llm = ChatGoogleGenerativeAI(
            model=config.LLM_MODEL,
            google_api_key=config.GOOGLE_API_KEY,
            temperature=config.LLM_TEMPERATURE,
        )
    return _llm


class Extractor:
    """One templated round trip: prompt -> model -> JSON object.

    The schema parser only supplies the format instructions. The reply is read
    leniently so one off-type field (null, "$2,000,000", 2.5) doesn't discard
    the rest; per-field coercion is left to ``normalize``.
    """

    def __init__(self, llm: Optional[BaseLanguageModel] = None, parser: Optional[PydanticOutputParser] = None):
        self._llm = llm
        self.parser = parser or output_parser()
        self.json_parser = JsonOutputParser()

    @property
    def llm(self) -> BaseLanguageModel:
        if self._llm is None:
            self._llm = _load_llm()
        return self._llm

    def build_prompt(self, raw_text: str) -> str:
        return PROMPT.format(
            format_instruction=self.parser.get_format_instructions(),
            description=raw_text,
        )

    async def extract(self, raw_text: str) -> Union[Dict[str, Any], ExtractionFailure]:
        try:
            chain = self.llm | StrOutputParser()
            raw_output = await chain.ainvoke(self.build_prompt(raw_text))
        except Exception as e:
            logger.exception("[EXTRACT] model call failed")
            return ExtractionFailure(reason=f"model call failed: {e}")

        logger.info(f"[EXTRACT] raw model output: {raw_output!r}")
        try:
            parsed = self.json_parser.parse(raw_output)
        except OutputParserException as e:
            logger.warning(f"[EXTRACT] unparseable output -> {e}")
            return ExtractionFailure(reason=str(e), raw_output=raw_output)
        if not isinstance(parsed, dict):
            logger.warning(f"[EXTRACT] expected a JSON object, got {type(parsed).__name__}")
            return ExtractionFailure(reason="reply is not a JSON object", raw_output=raw_output)

        # only what the model actually said; defaults are the normalizer's job
        names = {f.name for f in query_fields()}
        return {k: v for k, v in parsed.items() if k in names}
