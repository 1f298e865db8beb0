"""Functions for deleting objects from an S3 bucket--the "D" in CRUD."""

from botocore.exceptions import ClientError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

# Error codes S3-compatible stores use for a key that is already gone
MISSING_OBJECT_ERROR_CODES = {"NoSuchKey", "404", "NotFound"}


def delete_s3_object(bucket_name: str, object_key: str, s3_client: "S3Client") -> bool:
    """
    Delete a file from an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key of the object to delete.
    :param s3_client: The boto3 S3 client to delete with.
    :return: True if the object was deleted, False if it was already absent.
    """
    try:
        s3_client.delete_object(Bucket=bucket_name, Key=object_key)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") in MISSING_OBJECT_ERROR_CODES:
            return False
        raise
    return True
