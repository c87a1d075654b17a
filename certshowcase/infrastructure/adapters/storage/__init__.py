from .bucket_file_storage import BucketFileStorage, attachment_key

__all__ = ["BucketFileStorage", "attachment_key"]
