from .base import CamelDTO

class ReceiptUploadDTO(CamelDTO):
    success: bool
    key: str
    url: str
    message: str
