import os
import yaml
from typing import Dict, Any, List
from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document
from langchain_huggingface import HuggingFaceEmbeddings

from .config import APP_CONFIG
from .logger import logger

class KnowledgeBase:
    """Question answering over the curated banking FAQ."""

    def __init__(self, config: dict = None):
        self.config = config or APP_CONFIG
        self._vectorstore = None
        self._loaded = False

    def _load_documents(self) -> List[Document]:
        """Loads the question/answer pairs, indexing each entry by its question."""
        faq_path = os.path.join(os.path.dirname(__file__), '..', self.config["faq_path"])
        if not os.path.exists(faq_path):
            logger.warning(f"FAQ file not found at {faq_path}. Q&A will not return answers.")
            return []

        with open(faq_path, "r") as f:
            faq = yaml.safe_load(f) or {}

        return [
            Document(page_content=entry["question"], metadata={"answer": entry["answer"]})
            for entry in faq.get("faqs", [])
        ]

    def _get_vectorstore(self):
        if not self._loaded:
            docs = self._load_documents()
            if docs:
                embeddings = HuggingFaceEmbeddings(
                    model_name=self.config["embedding_model"],
                    encode_kwargs={"normalize_embeddings": True},
                )
                self._vectorstore = FAISS.from_documents(docs, embeddings)
            self._loaded = True
        return self._vectorstore

    def query(self, utterance: str) -> List[Dict[str, Any]]:
        """
        Finds the stored answers whose questions best match the utterance.

        Returns:
            Candidate answers as {"answer", "confidence"}, best first. An empty
            list means nothing matched closely enough.
        """
        logger.info("--- Q&A lookup ---")
        vectorstore = self._get_vectorstore()
        if vectorstore is None:
            return []

        results = vectorstore.similarity_search_with_relevance_scores(
            utterance,
            k=self.config["qna_top_k"],
            score_threshold=self.config["qna_score_threshold"],
        )
        answers = [
            {"answer": doc.metadata["answer"], "confidence": float(score)}
            for doc, score in results
        ]
        answers.sort(key=lambda a: a["confidence"], reverse=True)
        logger.debug(f"Q&A candidates: {answers}")
        return answers
