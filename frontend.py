"""Single-page directory browser served at /"""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <link rel="stylesheet" href="assets/styles.css">
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Lan Server</title>
    <script>
        function encodePath(path) {
            return path.split('/').map(encodeURIComponent).join('/');
        }

        async function fetchDirectory(path = '') {
            const listContainer = document.getElementById("directory-list");
            try {
                const response = await fetch(`/list/${encodePath(path)}`, {
                    credentials: 'include'
                });

                if (!response.ok) {
                    throw new Error(`HTTP error! status: ${response.status}`);
                }

                const data = await response.json();
                listContainer.innerHTML = "";

                const parentPath = path.split('/').slice(0, -2).join('/');
                const backButton = document.createElement("div");
                const button = document.createElement("button");
                button.textContent = "Back";
                backButton.appendChild(button);
                backButton.onclick = () => fetchDirectory(parentPath ? parentPath + '/' : '');
                listContainer.appendChild(backButton);

                data.forEach(entry => {
                    const listItem = document.createElement("div");
                    if (entry.is_dir) {
                        const label = document.createElement("strong");
                        label.textContent = `${entry.name}/`;
                        listItem.appendChild(label);
                        listItem.style.cursor = "pointer";
                        listItem.onclick = () => fetchDirectory(`${path}${entry.name}/`);
                    } else {
                        const link = document.createElement("a");
                        link.href = `/${encodePath(path + entry.name)}`;
                        link.setAttribute("download", "");
                        link.textContent = entry.name;
                        listItem.appendChild(link);
                    }
                    listContainer.appendChild(listItem);
                });
            } catch (error) {
                console.error("Error fetching directory:", error);
                listContainer.innerHTML = "";
                const message = document.createElement("div");
                message.style.color = "red";
                message.textContent = `Error: ${error.message}`;
                listContainer.appendChild(message);
            }
        }

        window.onload = () => fetchDirectory();
    </script>
</head>
<body>
    <h1>Directory Listing</h1>
    <div id="directory-list"></div>
</body>
</html>
"""
