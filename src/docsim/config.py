"""Pipeline configuration, from code or from DOCSIM_* environment variables."""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .clustering.hierarchical import LinkageMethod
from .errors import ConfigurationError
from .tokenizer import STOPWORDS

load_dotenv()

ClusterMethod = Literal["hierarchical", "kmeans"]


class PipelineConfig(BaseModel):
    """Caller-supplied settings for one pipeline run."""

    stopwords: frozenset[str] = Field(default=STOPWORDS, description="Words dropped by the tokenizer")
    min_token_length: int = Field(default=1, ge=1, description="Shortest token kept")
    linkage: LinkageMethod = Field(default="ward", description="Linkage method for hierarchical clustering")
    n_clusters: int = Field(default=2, ge=1, description="Desired number of clusters k")
    method: ClusterMethod = Field(default="hierarchical", description="Flat clustering algorithm")
    metric: Literal["cosine"] = Field(default="cosine", description="Similarity metric")
    seed: int = Field(default=42, description="Random seed for stochastic clusterers")
    show_progress: bool = Field(default=False, description="Show progress bars")

    @classmethod
    def from_config(cls, config: dict) -> "PipelineConfig":
        """
        Create a PipelineConfig from a configuration dict.

        Raises:
            ConfigurationError: If a value fails validation
        """
        try:
            return cls(**config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid pipeline configuration: {e}") from e

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """
        Create a PipelineConfig from DOCSIM_* environment variables.

        Recognized: DOCSIM_LINKAGE, DOCSIM_N_CLUSTERS, DOCSIM_METHOD,
        DOCSIM_SEED, DOCSIM_MIN_TOKEN_LENGTH, DOCSIM_SHOW_PROGRESS and
        DOCSIM_STOPWORDS (comma separated, replaces the default list).
        """
        env = {
            "linkage": os.getenv("DOCSIM_LINKAGE"),
            "n_clusters": os.getenv("DOCSIM_N_CLUSTERS"),
            "method": os.getenv("DOCSIM_METHOD"),
            "seed": os.getenv("DOCSIM_SEED"),
            "min_token_length": os.getenv("DOCSIM_MIN_TOKEN_LENGTH"),
            "show_progress": os.getenv("DOCSIM_SHOW_PROGRESS"),
        }
        config = {k: v for k, v in env.items() if v is not None}

        stopwords = os.getenv("DOCSIM_STOPWORDS")
        if stopwords is not None:
            config["stopwords"] = frozenset(w.strip().lower() for w in stopwords.split(",") if w.strip())

        return cls.from_config(config)
