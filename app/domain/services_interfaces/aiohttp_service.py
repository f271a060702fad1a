from abc import ABC, abstractmethod

class AiohttpServiceInterface(ABC):
    @abstractmethod
    async def get(self, url: str, headers: dict = None, params: dict = None) -> dict:
        """
        Sends an asynchronous GET request to the given URL with optional headers and query parameters.

        :param url: The URL to send the GET request to
        :param headers: Optional dictionary of headers to include in the request
        :param params: Optional dictionary of query parameters to include in the request
        :return: The response in JSON format as a dictionary
        :raises FetchFailed: If the request fails or the response status is not successful
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
