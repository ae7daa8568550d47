"""
Database operations - keyed document access for the forms collection
"""
from typing import Callable, List, Dict, Optional, Any
from app.config.database import db_config
from datetime import datetime

class DBOperations:
    """List, upsert and delete documents keyed by a string id"""

    def __init__(self, collection_getter: Optional[Callable[[str], Any]] = None):
        self._get_collection = collection_getter or db_config.get_collection

    async def get_all(self, collection_name: str) -> List[Dict]:
        """Get every document in a collection"""
        collection = self._get_collection(collection_name)
        return await collection.find({}).to_list(length=None)

    async def upsert(self, collection_name: str, doc_id: str, document: Dict) -> Dict:
        """Replace the document stored under doc_id, creating it if missing"""
        collection = self._get_collection(collection_name)
        document = dict(document)
        document["_id"] = doc_id
        document["updated_at"] = datetime.utcnow()
        await collection.replace_one({"_id": doc_id}, document, upsert=True)
        return document

    async def delete(self, collection_name: str, doc_id: str) -> bool:
        """Delete a document by ID"""
        collection = self._get_collection(collection_name)
        result = await collection.delete_one({"_id": doc_id})
        return result.deleted_count > 0

db_ops = DBOperations()
