"""Output writers for generated Terraform."""

from .writer import TerraformFileWriter

__all__ = ["TerraformFileWriter"]
