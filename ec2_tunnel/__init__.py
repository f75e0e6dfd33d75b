"""ec2-tunnel: open SSH port forwards to a dynamically addressed EC2 instance."""

__version__ = "0.1.0"
