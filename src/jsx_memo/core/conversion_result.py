"""
Data structures representing the output of the conversion pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code, any errors encountered, and the execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of a single file transform.
  """

  code: str = Field(default="", description="The generated source code.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal crashes.",
  )
  changed: bool = Field(default=False, description="True if at least one boundary or import was added.")
  rewrite_count: int = Field(default=0, description="Number of boundaries inserted.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

