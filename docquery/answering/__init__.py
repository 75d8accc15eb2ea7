from docquery.answering.client_base import BaseAnswerClient
from docquery.answering.factory import GroundedQueryFactory
from docquery.answering.grounded_query import GroundedQueryClient

__all__ = ["BaseAnswerClient", "GroundedQueryClient", "GroundedQueryFactory"]
