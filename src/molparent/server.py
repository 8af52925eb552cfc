from mcp.server.fastmcp import FastMCP

# All tools we want to expose via the MCP server
from molparent.infrastructure.resources import get_all_resources_tools
from molparent.tools.cleaning import get_all_standardization_tools

# create an MCP server
mcp = FastMCP("molparent")

# Add project manifest tools
for tool_func in get_all_resources_tools():
    mcp.add_tool(tool_func)

# Add standardization and parent structure tools
for tool_func in get_all_standardization_tools():
    mcp.add_tool(tool_func)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
