"""IaC emitters package.

Terraform HCL is the only target format.
"""

from .terraform import TerraformEmitter

__all__ = ["TerraformEmitter"]
