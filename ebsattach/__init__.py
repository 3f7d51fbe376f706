"""
tf-ebs-attach: "importa" un aws_volume_attachment en un terraform.tfstate.
"""

__version__ = "1.0.0"
